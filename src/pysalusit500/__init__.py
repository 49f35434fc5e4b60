"""Python client library for Salus iT500 thermostats.

The iT500 has no public API. This package drives the salus-it500.com consumer
portal as a browser would, logging in and scraping a fresh anti-forgery token
for every operation.

The library is organized into three layers:
1. **Session Client** (pysalusit500.api): One full login + request per logical operation
2. **State Synchronizer** (pysalusit500.synchronizer): Optimistic cache over slow writes
3. **Accessories** (pysalusit500.accessories): Smart-home characteristic adapters

Example:
    ```python
    from pysalusit500 import SalusClient

    async with SalusClient("user@example.com", "password", device_id=12345) as client:
        print(await client.synchronizer.current_temperature())
        await client.synchronizer.set_target_temperature(21.0)
    ```

    Direct session client access:

    ```python
    from pysalusit500 import SalusConnectAPI

    async with SalusConnectAPI("user@example.com", "password", 12345) as api:
        result = await api.read_state()
        if result.ok:
            print(result.value.auto_mode)
    ```
"""

from __future__ import annotations

from pysalusit500.accessories import (
    BoilerActiveAccessory,
    BoilerSensorAccessory,
    ContactSensorState,
    CurrentHeatingState,
    TargetHeatingState,
    TemperatureDisplayUnits,
    ThermostatAccessory,
)
from pysalusit500.api import SalusConnectAPI
from pysalusit500.auth import PortalAuthenticator
from pysalusit500.client import SalusClient
from pysalusit500.exceptions import (
    AuthenticationError,
    InvalidParameterError,
    MalformedResponseError,
    OperationFailedError,
    SalusConnectionError,
    SalusError,
    SalusTimeoutError,
    TokenNotFoundError,
)
from pysalusit500.models import (
    AutoMode,
    ControlAck,
    Credentials,
    DeviceField,
    DeviceState,
    OperationResult,
    PortalSession,
)
from pysalusit500.parsers import (
    extract_session_cookie,
    extract_token,
    parse_control_response,
    parse_device_state,
)
from pysalusit500.synchronizer import OptimisticCache, StateSynchronizer


__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "AutoMode",
    "BoilerActiveAccessory",
    "BoilerSensorAccessory",
    "ContactSensorState",
    "ControlAck",
    "Credentials",
    "CurrentHeatingState",
    "DeviceField",
    "DeviceState",
    "InvalidParameterError",
    "MalformedResponseError",
    "OperationFailedError",
    "OperationResult",
    "OptimisticCache",
    "PortalAuthenticator",
    "PortalSession",
    "SalusClient",
    "SalusConnectAPI",
    "SalusConnectionError",
    "SalusError",
    "SalusTimeoutError",
    "StateSynchronizer",
    "TargetHeatingState",
    "TemperatureDisplayUnits",
    "ThermostatAccessory",
    "TokenNotFoundError",
    "__version__",
    "extract_session_cookie",
    "extract_token",
    "parse_control_response",
    "parse_device_state",
]
