"""High-level client wiring the session client, synchronizer and accessories.

This module owns the aiohttp session lifecycle and hands out the objects a
smart-home integration needs for one thermostat.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import ClientSession  # noqa: TC002 - Used at runtime for type hints

from pysalusit500.accessories import BoilerActiveAccessory, BoilerSensorAccessory, ThermostatAccessory
from pysalusit500.api import SalusConnectAPI
from pysalusit500.const import DEFAULT_BASE_URL, DEFAULT_READ_TIMEOUT, DEFAULT_SETTLE_DELAY, DEFAULT_TIMEOUT
from pysalusit500.synchronizer import StateSynchronizer


if TYPE_CHECKING:
    from types import TracebackType

_LOGGER = logging.getLogger(__name__)


class SalusClient:
    """Entry point for controlling a Salus iT500 thermostat.

    Example:
        Basic usage with automatic session management:

        ```python
        from pysalusit500 import SalusClient

        async with SalusClient("user@example.com", "password", device_id=12345) as client:
            print(await client.synchronizer.current_temperature())

            # Returns after the settle delay; reads are optimistic meanwhile
            await client.synchronizer.set_target_temperature(21.0)
        ```

        Usage with an injected session:

        ```python
        from aiohttp import ClientSession, DummyCookieJar
        from pysalusit500 import SalusClient

        async with ClientSession(cookie_jar=DummyCookieJar()) as session:
            async with SalusClient("user@example.com", "password", 12345, session=session) as client:
                state = await client.thermostat.get_current_heating_state()
        ```

    Attributes:
        api: Session client used for every portal operation.
        synchronizer: Optimistic state layer over the session client.
        thermostat: Thermostat accessory adapter.
        boiler_sensor: Contact sensor adapter for the boiler relay.
        boiler_active: On/off adapter for the boiler relay.
    """

    def __init__(
        self,
        username: str,
        password: str,
        device_id: int,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        request_timeout: float = DEFAULT_TIMEOUT,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ) -> None:
        """Initialize the Salus client.

        Args:
            username: Portal account email address.
            password: Portal account password.
            device_id: Numeric identifier of the thermostat.
            base_url: Base URL for the portal. Defaults to the production portal.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager. Portal cookies are
                cleared from its jar around every operation.
            request_timeout: Total timeout in seconds for each HTTP request.
            settle_delay: Seconds a write waits before returning to the caller.
            read_timeout: Seconds a synchronizer read may take before it is
                reported as unknown.
        """
        self.api = SalusConnectAPI(
            username,
            password,
            device_id,
            base_url,
            session=session,
            timeout=request_timeout,
        )
        self.synchronizer = StateSynchronizer(
            self.api,
            settle_delay=settle_delay,
            read_timeout=read_timeout,
        )
        self.thermostat = ThermostatAccessory(self.synchronizer)
        self.boiler_sensor = BoilerSensorAccessory(self.synchronizer)
        self.boiler_active = BoilerActiveAccessory(self.synchronizer)

    async def __aenter__(self) -> SalusClient:
        """Enter the context manager, creating a session if needed."""
        await self.api.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Waits for background writes to settle, then closes the session.
        """
        await self.close()

    async def close(self) -> None:
        """Wait for pending writes and close the session if owned."""
        if self.synchronizer.pending_writes:
            _LOGGER.debug("Waiting for %d pending write(s) before closing", self.synchronizer.pending_writes)
        await self.synchronizer.wait_for_pending_writes()
        await self.api.close()
