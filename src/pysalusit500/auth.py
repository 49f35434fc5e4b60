"""Portal login handler for the Salus iT500 web portal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout, DummyCookieJar

from pysalusit500.const import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEVICES_PATH,
    FORM_CONTENT_TYPE,
    LOGIN_PARAMS,
    LOGIN_PATH,
)
from pysalusit500.exceptions import MalformedResponseError, SalusConnectionError, SalusTimeoutError
from pysalusit500.models import Credentials, PortalSession
from pysalusit500.parsers import extract_session_cookie, extract_token
from pysalusit500.serializers import serialize_login


if TYPE_CHECKING:
    from types import TracebackType

_LOGGER = logging.getLogger(__name__)


class PortalAuthenticator:
    """Log in to the Salus portal the way a browser does.

    The portal has no API tokens. Every logical operation needs a fresh
    session cookie and a fresh anti-forgery token, obtained by:

    1. Loading the login page to receive a session cookie.
    2. Posting the login form with that cookie.
    3. Loading the devices page and scraping the hidden ``token`` input.

    Nothing is cached between calls to ``open_session()``. The login response
    is not checked: if the credentials were wrong the devices page carries no
    token and step 3 fails.

    Example:
        ```python
        async with ClientSession(cookie_jar=DummyCookieJar()) as session:
            auth = PortalAuthenticator(credentials, session=session)
            portal_session = await auth.open_session()
        ```

    Attributes:
        credentials: Account credentials and device id.
        base_url: Base URL for the portal (without trailing slash).
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the authenticator.

        Args:
            credentials: Account credentials and device id.
            base_url: Base URL for the portal. Defaults to the production portal.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager. Portal cookies in
                its jar are dropped before and after every login, so a shared
                session with a real cookie jar works too.
            timeout: Total timeout in seconds for each HTTP request.
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")

        self._session = session
        self._owns_session = session is None
        self._timeout = ClientTimeout(total=timeout)

    @property
    def login_url(self) -> str:
        """Get the login page URL."""
        return f"{self.base_url}{LOGIN_PATH}"

    @property
    def devices_url(self) -> str:
        """Get the devices page URL."""
        return f"{self.base_url}{DEVICES_PATH}"

    def set_session(self, session: ClientSession) -> None:
        """Set the aiohttp session for this handler.

        The handler will not take ownership and will not close this session.

        Args:
            session: The aiohttp ClientSession to use for requests.
        """
        self._session = session
        self._owns_session = False

    async def __aenter__(self) -> PortalAuthenticator:
        """Enter the context manager, creating a session if needed."""
        if self._session is None:
            self._session = ClientSession(cookie_jar=DummyCookieJar())
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager, closing the session if it was created here."""
        if self._owns_session and self._session is not None:
            await self._session.close()

    def _validate_session(self) -> ClientSession:
        """Return the session after checking it is usable.

        Raises:
            RuntimeError: If session is not initialized or is closed.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make requests."
            raise RuntimeError(msg)

        return self._session

    def forget_portal_cookies(self) -> None:
        """Drop any portal cookies the session's jar has stored.

        The login page only sets a new cookie when the request carries none,
        so a remembered PHPSESSID would make the next login fail. Cookies for
        other hosts are left alone.
        """
        if self._session is None:
            return
        host = urlsplit(self.base_url).hostname
        if host:
            self._session.cookie_jar.clear_domain(host)

    async def open_session(self) -> PortalSession:
        """Run the login sequence and return a single-use portal session.

        Returns:
            PortalSession carrying the cookie and anti-forgery token.

        Raises:
            AuthenticationError: If the login page sets no cookie.
            TokenNotFoundError: If the devices page has no token.
            MalformedResponseError: If the devices page cannot be decoded.
            SalusTimeoutError: If a request times out.
            SalusConnectionError: If a connection error occurs.
            RuntimeError: If the session is not usable.
        """
        session = self._validate_session()
        self.forget_portal_cookies()

        try:
            async with session.get(self.login_url, params=LOGIN_PARAMS, timeout=self._timeout) as response:
                cookie = extract_session_cookie(response.headers.get("Set-Cookie"))
            _LOGGER.debug("Received session cookie from %s", self.login_url)

            async with session.post(
                self.login_url,
                params=LOGIN_PARAMS,
                data=serialize_login(self.credentials.email, self.credentials.password),
                headers={"Content-Type": FORM_CONTENT_TYPE, "Cookie": cookie},
                timeout=self._timeout,
            ) as response:
                _LOGGER.debug("Submitted login form for %s (HTTP %s)", self.credentials.email, response.status)

            async with session.get(self.devices_url, headers={"Cookie": cookie}, timeout=self._timeout) as response:
                html = await response.text()
            token = extract_token(html)
            _LOGGER.debug("Extracted device token from %s", self.devices_url)

        except TimeoutError as exc:
            msg = "Portal login request timed out"
            raise SalusTimeoutError(msg) from exc

        except ClientError as exc:
            msg = f"Failed to connect to portal: {exc}"
            raise SalusConnectionError(msg) from exc

        except UnicodeDecodeError as exc:
            msg = f"Could not decode {self.devices_url}: {exc}"
            raise MalformedResponseError(msg) from exc

        return PortalSession(cookie=cookie, token=token)
