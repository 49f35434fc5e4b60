"""Smart-home accessory adapters for a Salus thermostat.

These adapters translate generic characteristic get/set calls into
``StateSynchronizer`` calls. They hold no state of their own; an unknown
device state is reported as ``None``.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

from pysalusit500.exceptions import InvalidParameterError
from pysalusit500.models import AutoMode


if TYPE_CHECKING:
    from pysalusit500.synchronizer import StateSynchronizer

_LOGGER = logging.getLogger(__name__)


class CurrentHeatingState(IntEnum):
    """Current heating/cooling characteristic values."""

    OFF = 0
    HEAT = 1


class TargetHeatingState(IntEnum):
    """Target heating/cooling characteristic values.

    Only OFF (schedule off) and AUTO (schedule on) are accepted by the thermostat.
    """

    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class TemperatureDisplayUnits(IntEnum):
    """Temperature display unit characteristic values."""

    CELSIUS = 0
    FAHRENHEIT = 1


class ContactSensorState(IntEnum):
    """Contact sensor characteristic values."""

    CONTACT_DETECTED = 0
    CONTACT_NOT_DETECTED = 1


class ThermostatAccessory:
    """Thermostat accessory backed by a state synchronizer."""

    def __init__(self, synchronizer: StateSynchronizer) -> None:
        """Initialize the accessory.

        Args:
            synchronizer: Source of device state and target of writes.
        """
        self._synchronizer = synchronizer

    async def get_current_heating_state(self) -> CurrentHeatingState | None:
        """Get HEAT while the boiler is firing, OFF otherwise."""
        heating = await self._synchronizer.heating_active()
        if heating is None:
            return None
        return CurrentHeatingState.HEAT if heating else CurrentHeatingState.OFF

    async def get_target_heating_state(self) -> TargetHeatingState | None:
        """Get AUTO while the schedule is running, OFF otherwise."""
        mode = await self._synchronizer.auto_mode()
        if mode is None:
            return None
        return TargetHeatingState.AUTO if mode is AutoMode.AUTOMATIC else TargetHeatingState.OFF

    async def set_target_heating_state(self, value: TargetHeatingState) -> None:
        """Switch the schedule on (AUTO) or off (OFF).

        Raises:
            InvalidParameterError: If value is neither AUTO nor OFF.
        """
        if value not in (TargetHeatingState.AUTO, TargetHeatingState.OFF):
            msg = f"Target heating state must be AUTO or OFF, got {value!r}"
            raise InvalidParameterError(msg, parameter_name="target_heating_state", value=value)
        await self._synchronizer.set_auto_mode(value == TargetHeatingState.AUTO)

    async def get_current_temperature(self) -> float | None:
        """Get measured room temperature."""
        return await self._synchronizer.current_temperature()

    async def get_target_temperature(self) -> float | None:
        """Get target temperature."""
        return await self._synchronizer.target_temperature()

    async def set_target_temperature(self, value: float) -> None:
        """Set target temperature."""
        await self._synchronizer.set_target_temperature(value)

    def get_temperature_display_units(self) -> TemperatureDisplayUnits:
        """Get display units, always Celsius."""
        return TemperatureDisplayUnits.CELSIUS

    def set_temperature_display_units(self, value: TemperatureDisplayUnits) -> None:
        """Ignore display unit changes; the portal only speaks Celsius."""
        _LOGGER.debug("Ignoring request to change temperature units to %s", value)


class BoilerSensorAccessory:
    """Contact sensor that reports contact while the boiler is heating."""

    def __init__(self, synchronizer: StateSynchronizer) -> None:
        """Initialize the sensor on top of a shared synchronizer."""
        self._synchronizer = synchronizer

    async def get_contact_state(self) -> ContactSensorState | None:
        """Get CONTACT_DETECTED while heating, or None if unknown."""
        heating = await self._synchronizer.heating_active()
        if heating is None:
            return None
        return ContactSensorState.CONTACT_DETECTED if heating else ContactSensorState.CONTACT_NOT_DETECTED


class BoilerActiveAccessory:
    """Read-only on/off switch mirroring the boiler relay."""

    def __init__(self, synchronizer: StateSynchronizer) -> None:
        """Initialize the switch on top of a shared synchronizer."""
        self._synchronizer = synchronizer

    async def get_on(self) -> int | None:
        """Get 1 while the boiler is heating, 0 when idle, or None if unknown."""
        heating = await self._synchronizer.heating_active()
        if heating is None:
            return None
        return 1 if heating else 0

    def set_on(self, value: int) -> None:
        """Ignore the request; the boiler relay is driven by the thermostat."""
        _LOGGER.debug("Ignoring request to set boiler state to %s: not supported", value)
