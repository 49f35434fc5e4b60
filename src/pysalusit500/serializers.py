"""Serialization of portal form requests.

Stateless functions that build the form-encoded bodies and query parameters
the Salus portal expects. Keeping them here lets tests assert on the exact
wire shape without going through HTTP mocks.
"""

from __future__ import annotations

from pysalusit500.models import AutoMode


def serialize_login(email: str, password: str) -> dict[str, str]:
    """Serialize the login form.

    Example:
        >>> serialize_login("user@example.com", "secret")["login"]
        'Login'
    """
    return {
        "IDemail": email,
        "password": password,
        "login": "Login",
    }


def serialize_telemetry_query(device_id: int, token: str) -> dict[str, str]:
    """Serialize query parameters for the telemetry endpoint."""
    return {"devId": str(device_id), "token": token}


def serialize_auto_mode(device_id: int, token: str, mode: AutoMode) -> dict[str, str]:
    """Serialize a schedule mode change for the control endpoint.

    ``auto`` follows the same inverted polarity as ``CH1autoOff``:
    ``0`` switches the schedule on.

    Example:
        >>> serialize_auto_mode(42, "tok", AutoMode.AUTOMATIC)["auto"]
        '0'
    """
    return {
        "token": token,
        "devId": str(device_id),
        "auto": mode.to_wire(),
        "auto_setZ1": "1",
    }


def serialize_setpoint(device_id: int, token: str, celsius: float) -> dict[str, str]:
    """Serialize a target temperature change for the control endpoint."""
    return {
        "token": token,
        "devId": str(device_id),
        "tempUnit": "0",
        "current_tempZ1_set": "1",
        "current_tempZ1": f"{float(celsius):g}",
    }
