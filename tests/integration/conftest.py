"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pysalusit500 import SalusClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with portal credentials and configuration.
    """
    username = os.getenv("SALUS_USERNAME")
    password = os.getenv("SALUS_PASSWORD")
    device_id = os.getenv("SALUS_DEVICE_ID")
    base_url = os.getenv("SALUS_BASE_URL", "https://salus-it500.com")

    if not username or not password or not device_id:
        pytest.skip("SALUS_USERNAME, SALUS_PASSWORD and SALUS_DEVICE_ID must be set in .env")

    return {
        "username": username,
        "password": password,
        "device_id": device_id,
        "base_url": base_url,
    }


@pytest.fixture
async def integration_client(integration_config: dict[str, str]) -> AsyncGenerator[SalusClient]:
    """Create a client connected to the live portal."""
    async with SalusClient(
        integration_config["username"],
        integration_config["password"],
        int(integration_config["device_id"]),
        integration_config["base_url"],
    ) as client:
        yield client
