"""Data models for the Salus iT500 portal."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from pysalusit500.exceptions import OperationFailedError


__all__ = [
    "AutoMode",
    "ControlAck",
    "Credentials",
    "DeviceField",
    "DeviceState",
    "OperationResult",
    "PortalSession",
]

_T = TypeVar("_T")


class AutoMode(Enum):
    """Schedule mode of the thermostat.

    The portal reports this as ``CH1autoOff`` where ``'0'`` means the schedule
    is running. Convert only through ``from_wire``/``to_wire``.
    """

    AUTOMATIC = "automatic"
    MANUAL = "manual"

    @classmethod
    def from_wire(cls, value: str) -> AutoMode:
        """Convert a ``CH1autoOff`` value to a mode."""
        if value == "0":
            return cls.AUTOMATIC
        if value == "1":
            return cls.MANUAL
        msg = f"Unknown auto-off flag: {value!r}"
        raise ValueError(msg)

    def to_wire(self) -> str:
        """Convert the mode to its ``CH1autoOff`` / ``auto`` form value."""
        return "0" if self is AutoMode.AUTOMATIC else "1"


class DeviceField(Enum):
    """Readable thermostat fields."""

    CURRENT_TEMPERATURE = "current_temperature"
    TARGET_TEMPERATURE = "target_temperature"
    AUTO_MODE = "auto_mode"
    HEATING_ACTIVE = "heating_active"

    @property
    def writable(self) -> bool:
        """Whether the portal accepts writes for this field."""
        return self in (DeviceField.TARGET_TEMPERATURE, DeviceField.AUTO_MODE)


@dataclass(frozen=True)
class Credentials:
    """Account credentials and target device.

    Attributes:
        email: Portal account email address.
        password: Portal account password.
        device_id: Numeric identifier of the thermostat on the portal.
    """

    email: str
    password: str = field(repr=False)
    device_id: int


@dataclass(frozen=True)
class PortalSession:
    """Cookie and anti-forgery token for a single portal operation.

    Attributes:
        cookie: ``name=value`` pair to send in the ``Cookie`` header.
        token: Single-use token scraped from the devices page.
    """

    cookie: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class DeviceState:
    """Full thermostat snapshot from the telemetry endpoint.

    Values are kept as the text the portal sent and parsed on access.

    Attributes:
        current_room_temp: Measured room temperature (``CH1currentRoomTemp``).
        current_set_point: Target temperature (``CH1currentSetPoint``).
        auto_off: Schedule flag (``CH1autoOff``), ``'0'`` when automatic.
        heat_on_off_status: Boiler relay flag (``CH1heatOnOffStatus``).
        raw_data: Original API response data for debugging.
    """

    current_room_temp: str
    current_set_point: str
    auto_off: str
    heat_on_off_status: str
    raw_data: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def room_temperature(self) -> float:
        """Get measured room temperature in Celsius."""
        return float(self.current_room_temp)

    @property
    def set_point(self) -> float:
        """Get target temperature in Celsius."""
        return float(self.current_set_point)

    @property
    def auto_mode(self) -> AutoMode:
        """Get schedule mode."""
        return AutoMode.from_wire(self.auto_off)

    @property
    def heating_active(self) -> bool:
        """Check if the boiler relay is energized."""
        return self.heat_on_off_status == "1"

    def with_set_point(self, celsius: float) -> DeviceState:
        """Return a copy with a different target temperature."""
        return replace(self, current_set_point=str(float(celsius)))

    def with_auto_mode(self, mode: AutoMode) -> DeviceState:
        """Return a copy with a different schedule mode."""
        return replace(self, auto_off=mode.to_wire())


@dataclass(frozen=True)
class ControlAck:
    """Response from the control endpoint.

    Attributes:
        success: Whether the portal reported the command as accepted.
        ret_code: ``retCode`` value, if the portal returned one.
        updated_at: ``updTime`` value, if the portal returned one.
    """

    success: bool
    ret_code: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class OperationResult(Generic[_T]):
    """Outcome of one logical portal operation.

    Either carries a value or is an opaque failure; which protocol step
    failed is deliberately not exposed.

    Example:
        >>> result = await api.read_state()
        >>> if result.ok:
        ...     print(result.value.room_temperature)
    """

    value: _T | None = None

    @classmethod
    def success(cls, value: _T) -> OperationResult[_T]:
        """Build a successful result."""
        return cls(value=value)

    @classmethod
    def failure(cls) -> OperationResult[_T]:
        """Build a failed result."""
        return cls()

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.value is not None

    def unwrap(self) -> _T:
        """Return the value or raise ``OperationFailedError``."""
        if self.value is None:
            msg = "Portal operation failed"
            raise OperationFailedError(msg)
        return self.value
