"""Optimistic state synchronization for a Salus thermostat.

The portal is slow (a full login, token scrape and request takes seconds), the
telemetry endpoint is the only source of truth, and writes give no signal when
they take effect. This module keeps get/set accessors responsive by pinning a
locally-edited snapshot while a write is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable  # noqa: TC003 - Used at runtime for type hints
from typing import TYPE_CHECKING

from pysalusit500.const import (
    DEFAULT_READ_TIMEOUT,
    DEFAULT_SETTLE_DELAY,
    TARGET_TEMPERATURE_MAX,
    TARGET_TEMPERATURE_MIN,
)
from pysalusit500.exceptions import InvalidParameterError
from pysalusit500.models import AutoMode, DeviceField, DeviceState


if TYPE_CHECKING:
    from collections.abc import Awaitable

    from pysalusit500.api import SalusConnectAPI
    from pysalusit500.models import ControlAck, OperationResult

_LOGGER = logging.getLogger(__name__)

FieldValue = float | bool | AutoMode


class OptimisticCache:
    """Single slot holding the snapshot served while a write is in flight.

    Each install bumps a generation number so a settling write can tell
    whether the entry it is about to clear is its own. The slot is cleared
    either way (last writer wins); the generation only makes the overlap
    visible in logs and tests.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entry: DeviceState | None = None
        self._generation = 0

    @property
    def entry(self) -> DeviceState | None:
        """Get the cached snapshot, if any."""
        return self._entry

    @property
    def generation(self) -> int:
        """Get the generation of the most recent install."""
        return self._generation

    def install(self, state: DeviceState) -> int:
        """Replace the cached snapshot.

        Returns:
            Generation number identifying this install.
        """
        self._generation += 1
        self._entry = state
        return self._generation

    def clear(self) -> None:
        """Drop the cached snapshot."""
        self._entry = None


class StateSynchronizer:
    """Coherent get/set view of a thermostat on top of ``SalusConnectAPI``.

    **Reads** come from the optimistic cache when a write is in flight,
    otherwise from a live ``read_state()`` bounded by ``read_timeout``. A
    failed or timed-out read returns ``None``.

    **Writes** fetch the current state, install a copy with the new value as
    the cache entry, start the remote write in the background and return
    after ``settle_delay`` seconds. When the background write settles, the
    cache is cleared whatever the outcome, so the next read is live again.

    Setting a temperature while the schedule is running drops the thermostat
    into manual mode: the cached auto mode flips to MANUAL at once and the
    remote side receives two commands, schedule off then temperature.

    Concurrent writes share the single cache slot. The latest write's entry
    replaces any earlier one and the first background write to settle clears
    the slot, even if a later write installed the current entry. Writes are
    not serialized.

    Example:
        ```python
        async with SalusConnectAPI("user@example.com", "password", 12345) as api:
            thermostat = StateSynchronizer(api)

            print(await thermostat.current_temperature())
            await thermostat.set_target_temperature(21.5)

            # Served from the optimistic cache until the portal write settles
            print(await thermostat.target_temperature())
        ```
    """

    def __init__(
        self,
        api: SalusConnectAPI,
        *,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            api: Session client used for every remote operation.
            settle_delay: Seconds a write waits before returning to the caller.
            read_timeout: Seconds a live read may take before it is reported
                as unknown.
        """
        self._api = api
        self._settle_delay = settle_delay
        self._read_timeout = read_timeout
        self._cache = OptimisticCache()

        self._listeners: list[Callable[[StateSynchronizer], None]] = []
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def cached_state(self) -> DeviceState | None:
        """Get the optimistic snapshot, or None when reads are live."""
        return self._cache.entry

    @property
    def pending_writes(self) -> int:
        """Get the number of background writes that have not settled."""
        return len(self._pending)

    # -------------------------------------------------------------------------
    # Field Access
    # -------------------------------------------------------------------------

    async def get_field(self, field: DeviceField) -> FieldValue | None:
        """Read one field.

        Args:
            field: Field to read.

        Returns:
            Field value, or None if the device state is unknown.

        Raises:
            RuntimeError: If the client was closed or never entered; using a
                closed client is a programming error, not a portal failure.
        """
        cached = self._cache.entry
        if cached is not None:
            return _format_field(cached, field)

        try:
            result = await asyncio.wait_for(self._api.read_state(), timeout=self._read_timeout)
        except TimeoutError:
            _LOGGER.warning("Reading %s timed out after %.1fs", field.value, self._read_timeout)
            return None

        if not result.ok:
            _LOGGER.warning("Reading %s failed, reporting unknown", field.value)
            return None

        return _format_field(result.unwrap(), field)

    async def set_field(self, field: DeviceField, value: FieldValue) -> None:
        """Write one field with an optimistic update.

        Args:
            field: Writable field (TARGET_TEMPERATURE or AUTO_MODE).
            value: Temperature in Celsius, or an AutoMode.

        Raises:
            InvalidParameterError: If the field is read-only or the value is
                not acceptable for it (temperatures must be finite and 5-35).
        """
        steps = self._plan_write(field, value)

        basis = await self._api.read_state()
        generation: int | None = None
        if basis.ok:
            state = basis.unwrap()
            if field is DeviceField.AUTO_MODE:
                optimistic = state.with_auto_mode(value)  # type: ignore[arg-type]
            else:
                optimistic = state.with_set_point(float(value))
                if state.auto_mode is AutoMode.AUTOMATIC:
                    optimistic = optimistic.with_auto_mode(AutoMode.MANUAL)
                    steps = [self._disable_schedule, *steps]
            generation = self._cache.install(optimistic)
            _LOGGER.debug("Installed optimistic state #%d for %s=%s", generation, field.value, value)
            self._notify_listeners()
        else:
            _LOGGER.warning("Could not read state before writing %s, proceeding without optimistic state", field.value)

        task = asyncio.create_task(self._write_in_background(field, steps, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        await asyncio.sleep(self._settle_delay)

    def _plan_write(
        self,
        field: DeviceField,
        value: FieldValue,
    ) -> list[Callable[[], Awaitable[OperationResult[ControlAck]]]]:
        """Return the remote calls for a write, validating the value."""
        if field is DeviceField.AUTO_MODE:
            if not isinstance(value, AutoMode):
                msg = f"Auto mode must be an AutoMode, got {value!r}"
                raise InvalidParameterError(msg, parameter_name=field.value, value=value)
            return [lambda: self._api.set_auto_mode(value)]

        if field is DeviceField.TARGET_TEMPERATURE:
            if isinstance(value, (bool, AutoMode)):
                msg = f"Target temperature must be a number, got {value!r}"
                raise InvalidParameterError(msg, parameter_name=field.value, value=value)
            celsius = float(value)
            if not math.isfinite(celsius) or not TARGET_TEMPERATURE_MIN <= celsius <= TARGET_TEMPERATURE_MAX:
                msg = f"Target temperature must be {TARGET_TEMPERATURE_MIN}-{TARGET_TEMPERATURE_MAX}, got {value}"
                raise InvalidParameterError(msg, parameter_name=field.value, value=value)
            return [lambda: self._api.set_setpoint(celsius)]

        msg = f"Field {field.value} is read-only"
        raise InvalidParameterError(msg, parameter_name=field.value, value=value)

    async def _disable_schedule(self) -> OperationResult[ControlAck]:
        return await self._api.set_auto_mode(AutoMode.MANUAL)

    async def _write_in_background(
        self,
        field: DeviceField,
        steps: list[Callable[[], Awaitable[OperationResult[ControlAck]]]],
        generation: int | None,
    ) -> None:
        """Run every remote step, then clear the cache unconditionally."""
        try:
            for step in steps:
                try:
                    result = await step()
                except Exception:
                    _LOGGER.exception("Unexpected error writing %s", field.value)
                    continue
                if not result.ok:
                    _LOGGER.warning("Remote write of %s failed", field.value)
        finally:
            if generation is not None and generation != self._cache.generation:
                _LOGGER.debug(
                    "Write #%d settled after write #%d, clearing the newer optimistic state",
                    generation,
                    self._cache.generation,
                )
            self._cache.clear()
            _LOGGER.debug("Cleared optimistic state after writing %s", field.value)
            self._notify_listeners()

    async def wait_for_pending_writes(self) -> None:
        """Wait until every background write has settled.

        Writes are never cancelled; this only awaits them.
        """
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    async def current_temperature(self) -> float | None:
        """Get measured room temperature in Celsius."""
        return await self.get_field(DeviceField.CURRENT_TEMPERATURE)  # type: ignore[return-value]

    async def target_temperature(self) -> float | None:
        """Get target temperature in Celsius."""
        return await self.get_field(DeviceField.TARGET_TEMPERATURE)  # type: ignore[return-value]

    async def heating_active(self) -> bool | None:
        """Check if the boiler is currently heating."""
        return await self.get_field(DeviceField.HEATING_ACTIVE)  # type: ignore[return-value]

    async def auto_mode(self) -> AutoMode | None:
        """Get schedule mode."""
        return await self.get_field(DeviceField.AUTO_MODE)  # type: ignore[return-value]

    async def set_target_temperature(self, celsius: float) -> None:
        """Set target temperature.

        Args:
            celsius: Target temperature (5-35).

        Raises:
            InvalidParameterError: If the temperature is outside the valid range.
        """
        await self.set_field(DeviceField.TARGET_TEMPERATURE, celsius)

    async def set_auto_mode(self, enabled: bool) -> None:
        """Switch the weekly schedule on or off."""
        await self.set_field(DeviceField.AUTO_MODE, AutoMode.AUTOMATIC if enabled else AutoMode.MANUAL)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def _notify_listeners(self) -> None:
        """Notify all registered listeners that the cached state changed.

        A listener that raises is logged and does not affect the others.
        """
        for listener in self._listeners:
            try:
                listener(self)
            except Exception:
                _LOGGER.exception("Error in state change listener")

    def add_listener(self, callback: Callable[[StateSynchronizer], None]) -> None:
        """Register a callback fired when the optimistic state is installed or cleared."""
        if callback not in self._listeners:
            self._listeners.append(callback)
            _LOGGER.debug("Added state change listener")

    def remove_listener(self, callback: Callable[[StateSynchronizer], None]) -> None:
        """Unregister a state change callback."""
        if callback in self._listeners:
            self._listeners.remove(callback)
            _LOGGER.debug("Removed state change listener")


def _format_field(state: DeviceState, field: DeviceField) -> FieldValue:
    if field is DeviceField.CURRENT_TEMPERATURE:
        return round(state.room_temperature, 1)
    if field is DeviceField.TARGET_TEMPERATURE:
        return round(state.set_point, 1)
    if field is DeviceField.AUTO_MODE:
        return state.auto_mode
    return state.heating_active
