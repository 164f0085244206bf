"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pythermostat import ThermostatClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_base_url() -> str:
    """Load the device address from the environment.

    Returns:
        Device base URL.
    """
    base_url = os.getenv("THERMOSTAT_BASE_URL")
    if not base_url:
        pytest.skip("THERMOSTAT_BASE_URL not set; create .env with the device address")
    return base_url


@pytest.fixture
async def integration_client(integration_base_url: str) -> AsyncGenerator[ThermostatClient]:
    """Create a started client against the real device.

    Power and setpoint are restored to their initial values afterwards.
    """
    async with ThermostatClient(base_url=integration_base_url) as client:
        if not client.is_online:
            pytest.skip(f"Device at {integration_base_url} is not reachable")

        initial_power = client.model.is_on
        initial_setpoint = client.model.setpoint_temp

        yield client

        await client.set_setpoint(initial_setpoint)
        await client.set_power(initial_power)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for integration tests."""
    config.addinivalue_line("markers", "integration: Integration tests requiring a real device")


@pytest.fixture(autouse=True)
async def settle_delay(request: pytest.FixtureRequest) -> AsyncGenerator[None]:
    """Give the device a moment between integration tests.

    The ESP32 web server handles one request at a time; back-to-back tests
    otherwise see spurious timeouts.
    """
    if "integration" in request.keywords:
        yield
        await asyncio.sleep(1.0)
    else:
        yield
