"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession

from pysalusit500.const import DEVICES_PATH, LOGIN_PATH


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


SESSION_COOKIE = "PHPSESSID=abc123"
DEVICE_TOKEN = "tok-42"
DEVICES_HTML = f"""<html>
<body>
<form method="post">
<input name="token" type="hidden" value="{DEVICE_TOKEN}" />
</form>
</body>
</html>"""
TELEMETRY = {
    "CH1currentRoomTemp": "20.5",
    "CH1currentSetPoint": "21.0",
    "CH1autoOff": "0",
    "CH1heatOnOffStatus": "1",
}


def build_response(
    *,
    status: int = 200,
    headers: dict[str, str] | None = None,
    text: str = "",
    json_data: Any = None,
    json_error: Exception | None = None,
) -> MagicMock:
    """Create a mock aiohttp ClientResponse usable with ``async with``."""
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.text = AsyncMock(return_value=text)
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=json_data)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


class FakePortal:
    """Route mocked session calls to canned portal pages.

    GET requests go to the login or devices page by URL, the login form POST
    returns ``login_response`` and the final request returns ``final_response``.
    Swap any attribute to simulate a failure at that step.
    """

    def __init__(self, session: ClientSession) -> None:
        self.cookie_response = build_response(headers={"Set-Cookie": f"{SESSION_COOKIE}; path=/"})
        self.login_response = build_response(text="<html>Welcome</html>")
        self.devices_response = build_response(text=DEVICES_HTML)
        self.final_response = build_response(json_data=dict(TELEMETRY))

        session.get.side_effect = self._route_get
        session.post.side_effect = lambda *args, **kwargs: self.login_response
        session.request.side_effect = lambda *args, **kwargs: self.final_response

    def _route_get(self, url: str, *args: object, **kwargs: object) -> MagicMock:
        if url.endswith(LOGIN_PATH):
            return self.cookie_response
        if url.endswith(DEVICES_PATH):
            return self.devices_response
        msg = f"Unexpected GET {url}"
        raise AssertionError(msg)


@pytest.fixture
async def mock_session() -> AsyncGenerator[ClientSession]:
    """Create a mock aiohttp ClientSession.

    Yields:
        Mock ClientSession for testing.
    """
    session = AsyncMock(spec=ClientSession)
    session.closed = False

    async def mock_close() -> None:
        session.closed = True

    session.close = mock_close

    yield session

    if not session.closed:
        await session.close()


@pytest.fixture
def portal(mock_session: ClientSession) -> FakePortal:
    """Serve a working login dance and telemetry response from the mock session."""
    return FakePortal(mock_session)
