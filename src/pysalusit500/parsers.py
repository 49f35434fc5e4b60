"""Parsing utilities for Salus portal responses.

This module converts raw portal responses (headers, HTML, decoded JSON) into
data models. Every function raises a library exception on mismatch so that
``SalusConnectAPI`` can collapse it into a failed result.
"""

from __future__ import annotations

import re
from typing import Any

from pysalusit500.const import (
    FIELD_AUTO_OFF,
    FIELD_HEAT_STATUS,
    FIELD_ROOM_TEMP,
    FIELD_SET_POINT,
    TOKEN_PATTERN,
)
from pysalusit500.exceptions import AuthenticationError, MalformedResponseError, TokenNotFoundError
from pysalusit500.models import ControlAck, DeviceState


__all__ = [
    "extract_session_cookie",
    "extract_token",
    "parse_control_response",
    "parse_device_state",
]

_TOKEN_RE = re.compile(TOKEN_PATTERN)
_FLAG_VALUES = ("0", "1")


def extract_session_cookie(set_cookie: str | None) -> str:
    """Extract the ``name=value`` pair from a ``Set-Cookie`` header.

    Args:
        set_cookie: Raw header value, e.g. ``"PHPSESSID=abc; path=/"``.

    Returns:
        Cookie pair suitable for a ``Cookie`` request header.

    Raises:
        AuthenticationError: If the header is missing or empty.
    """
    cookie = (set_cookie or "").split(";", 1)[0].strip()
    if not cookie:
        msg = "Login page did not set a session cookie"
        raise AuthenticationError(msg)
    return cookie


def extract_token(html: str) -> str:
    """Extract the anti-forgery token from the devices page.

    Args:
        html: Body of the devices page.

    Returns:
        Token value.

    Raises:
        TokenNotFoundError: If the hidden token input is not present.
    """
    match = _TOKEN_RE.search(html)
    if match is None:
        msg = "Device token not found in devices page"
        raise TokenNotFoundError(msg)
    return match.group(1)


def parse_device_state(data: Any) -> DeviceState:
    """Parse the telemetry response into a device state.

    All four channel-1 fields must be present: the portal never returns a
    partial snapshot and neither does this function.

    Args:
        data: Decoded JSON in format:
              {"CH1currentRoomTemp": "20.5", "CH1currentSetPoint": "21.0",
               "CH1autoOff": "0", "CH1heatOnOffStatus": "1", ...}

    Returns:
        DeviceState instance.

    Raises:
        MalformedResponseError: If a field is missing or has an unexpected value.
    """
    if not isinstance(data, dict):
        msg = f"Expected JSON object from telemetry endpoint, got {type(data).__name__}"
        raise MalformedResponseError(msg)

    missing = [key for key in (FIELD_ROOM_TEMP, FIELD_SET_POINT, FIELD_AUTO_OFF, FIELD_HEAT_STATUS) if key not in data]
    if missing:
        msg = f"Telemetry response missing fields: {', '.join(missing)}"
        raise MalformedResponseError(msg)

    room_temp = str(data[FIELD_ROOM_TEMP])
    set_point = str(data[FIELD_SET_POINT])
    auto_off = str(data[FIELD_AUTO_OFF])
    heat_status = str(data[FIELD_HEAT_STATUS])

    for key, value in ((FIELD_ROOM_TEMP, room_temp), (FIELD_SET_POINT, set_point)):
        try:
            float(value)
        except ValueError:
            msg = f"Invalid temperature for {key}: {value!r}"
            raise MalformedResponseError(msg) from None

    for key, value in ((FIELD_AUTO_OFF, auto_off), (FIELD_HEAT_STATUS, heat_status)):
        if value not in _FLAG_VALUES:
            msg = f"Invalid flag for {key}: {value!r}"
            raise MalformedResponseError(msg)

    return DeviceState(
        current_room_temp=room_temp,
        current_set_point=set_point,
        auto_off=auto_off,
        heat_on_off_status=heat_status,
        raw_data=dict(data),
    )


def parse_control_response(data: Any) -> ControlAck:
    """Parse the control endpoint response.

    The portal answers either with an object carrying ``retCode``/``updTime``
    or with a bare ``1`` success marker.

    Args:
        data: Decoded JSON body.

    Returns:
        ControlAck instance.

    Raises:
        MalformedResponseError: If the body has neither shape.
    """
    if isinstance(data, dict):
        if "retCode" not in data:
            msg = "Control response missing retCode"
            raise MalformedResponseError(msg)
        ret_code = str(data["retCode"])
        updated_at = data.get("updTime")
        return ControlAck(
            success=ret_code == "0",
            ret_code=ret_code,
            updated_at=str(updated_at) if updated_at is not None else None,
        )

    if isinstance(data, (str, int)) and not isinstance(data, bool):
        return ControlAck(success=str(data) == "1")

    msg = f"Unexpected control response: {data!r}"
    raise MalformedResponseError(msg)
