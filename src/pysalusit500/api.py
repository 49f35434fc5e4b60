"""Session client for the Salus iT500 web portal.

This module drives the consumer portal as a browser would. Each public method
is one logical operation: a complete login, token scrape and final request.
All methods return ``OperationResult`` values and never raise for portal
failures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aiohttp import ClientError, ClientSession, ClientTimeout, DummyCookieJar

from pysalusit500.auth import PortalAuthenticator
from pysalusit500.const import (
    CONTROL_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    FORM_CONTENT_TYPE,
    TELEMETRY_PATH,
)
from pysalusit500.exceptions import (
    MalformedResponseError,
    SalusConnectionError,
    SalusError,
    SalusTimeoutError,
)
from pysalusit500.models import AutoMode, ControlAck, Credentials, DeviceState, OperationResult, PortalSession
from pysalusit500.parsers import parse_control_response, parse_device_state
from pysalusit500.serializers import serialize_auto_mode, serialize_setpoint, serialize_telemetry_query


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class SalusConnectAPI:
    """Session client for a single Salus iT500 thermostat.

    Nothing is reused between operations: every call logs in again, scrapes a
    new token and issues the final request. Whatever goes wrong along the way
    (transport error, missing cookie, missing token, unparseable JSON), the
    caller only sees a failed ``OperationResult``.

    Example:
        ```python
        from pysalusit500 import AutoMode, SalusConnectAPI

        async with SalusConnectAPI("user@example.com", "password", 12345) as api:
            result = await api.read_state()
            if result.ok:
                print(result.value.room_temperature)

            await api.set_auto_mode(AutoMode.MANUAL)
            await api.set_setpoint(21.5)
        ```

    Attributes:
        device_id: Numeric identifier of the thermostat.
    """

    def __init__(
        self,
        email: str,
        password: str,
        device_id: int,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        authenticator: PortalAuthenticator | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the session client.

        Args:
            email: Portal account email address.
            password: Portal account password.
            device_id: Numeric identifier of the thermostat.
            base_url: Base URL for the portal. Defaults to the production portal.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager. Portal cookies are
                cleared from its jar around every operation.
            authenticator: Optional pre-configured PortalAuthenticator. If not
                provided, one will be created with the given credentials.
            timeout: Total timeout in seconds for each HTTP request.
        """
        if authenticator is not None:
            self._authenticator = authenticator
        else:
            self._authenticator = PortalAuthenticator(
                Credentials(email=email, password=password, device_id=device_id),
                base_url=base_url,
                session=session,
                timeout=timeout,
            )

        self.device_id = device_id
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self._timeout = ClientTimeout(total=timeout)

    async def __aenter__(self) -> SalusConnectAPI:
        """Enter the context manager, creating a session if needed.

        Returns:
            Self for use in async with statements.
        """
        if self._session is None:
            self._session = ClientSession(cookie_jar=DummyCookieJar())
            self._owns_session = True
        self._authenticator.set_session(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager, closing the session if it was created here."""
        await self.close()

    async def close(self) -> None:
        """Close the session if it was created by this client."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    # -------------------------------------------------------------------------
    # Logical Operations
    # -------------------------------------------------------------------------

    async def read_state(self) -> OperationResult[DeviceState]:
        """Read the full device state.

        Returns:
            Result carrying a DeviceState, or a failed result.
        """
        return await self._run("read state", self._fetch_state)

    async def set_auto_mode(self, mode: AutoMode) -> OperationResult[ControlAck]:
        """Switch the weekly schedule on or off.

        Args:
            mode: AutoMode.AUTOMATIC to follow the schedule, AutoMode.MANUAL to hold.

        Returns:
            Result carrying the portal acknowledgement, or a failed result.
        """

        async def send(portal_session: PortalSession) -> ControlAck:
            return await self._send_control(portal_session, serialize_auto_mode(self.device_id, portal_session.token, mode))

        return await self._run(f"set auto mode to {mode.value}", send)

    async def set_setpoint(self, celsius: float) -> OperationResult[ControlAck]:
        """Set the target temperature.

        Args:
            celsius: Target temperature in Celsius.

        Returns:
            Result carrying the portal acknowledgement, or a failed result.
        """

        async def send(portal_session: PortalSession) -> ControlAck:
            return await self._send_control(portal_session, serialize_setpoint(self.device_id, portal_session.token, celsius))

        return await self._run(f"set setpoint to {celsius}", send)

    # -------------------------------------------------------------------------
    # Protocol Steps
    # -------------------------------------------------------------------------

    async def _run(
        self,
        description: str,
        operation: Callable[[PortalSession], Awaitable[_T]],
    ) -> OperationResult[_T]:
        """Log in, run the final request and collapse any failure."""
        try:
            portal_session = await self._authenticator.open_session()
            value = await operation(portal_session)
        except (SalusError, ClientError, TimeoutError) as exc:
            _LOGGER.warning("Failed to %s for device %s: %s", description, self.device_id, exc)
            return OperationResult.failure()
        finally:
            self._authenticator.forget_portal_cookies()

        _LOGGER.debug("Completed %s for device %s", description, self.device_id)
        return OperationResult.success(value)

    async def _fetch_state(self, portal_session: PortalSession) -> DeviceState:
        data = await self._request_json(
            "GET",
            f"{self._base_url}{TELEMETRY_PATH}",
            params=serialize_telemetry_query(self.device_id, portal_session.token),
            headers={"Cookie": portal_session.cookie},
        )
        return parse_device_state(data)

    async def _send_control(self, portal_session: PortalSession, form: dict[str, str]) -> ControlAck:
        data = await self._request_json(
            "POST",
            f"{self._base_url}{CONTROL_PATH}",
            data=form,
            headers={"Content-Type": FORM_CONTENT_TYPE, "Cookie": portal_session.cookie},
        )
        return parse_control_response(data)

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Issue the final request and decode its JSON body.

        The portal serves JSON with an HTML content type, so the content type
        is not checked.

        Raises:
            MalformedResponseError: If the body is not valid JSON.
            SalusTimeoutError: If the request times out.
            SalusConnectionError: If a connection error occurs.
            RuntimeError: If the session is not usable.
        """
        if self._session is None or self._session.closed:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        try:
            async with self._session.request(method, url, timeout=self._timeout, **kwargs) as response:
                return await response.json(content_type=None)

        except TimeoutError as exc:
            msg = f"Request to {url} timed out"
            raise SalusTimeoutError(msg) from exc

        except ClientError as exc:
            msg = f"Connection error for {url}: {exc}"
            raise SalusConnectionError(msg) from exc

        except ValueError as exc:
            msg = f"Invalid JSON response from {url}: {exc}"
            raise MalformedResponseError(msg) from exc
