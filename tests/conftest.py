"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession, web

from pythermostat.connectivity import ConnectivityTracker
from pythermostat.models import DeviceState
from pythermostat.reconciler import Reconciler
from pythermostat.scheduler import ManualScheduler


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


SAMPLE_STATE_RESPONSE: dict[str, Any] = {
    "is_on": True,
    "setpoint_temp": 65.0,
    "current_temp": 58.3,
    "relay_state": True,
}


class FakeDevice:
    """In-memory stand-in for the device's REST API.

    Attributes:
        state: Payload served by GET /api/state.
        fail_state: Status to answer GET /api/state with instead of 200.
        fail_power: Status to answer POST /api/power with instead of 200.
        fail_setpoint: Status to answer POST /api/setpoint with instead of 200.
        requests: (method, path, body) for every request received.
    """

    def __init__(self) -> None:
        self.state: dict[str, Any] = dict(SAMPLE_STATE_RESPONSE)
        self.fail_state: int | None = None
        self.fail_power: int | None = None
        self.fail_setpoint: int | None = None
        self.requests: list[tuple[str, str, Any]] = []

    def count(self, method: str, path: str) -> int:
        """Count requests received for an endpoint."""
        return sum(1 for m, p, _ in self.requests if m == method and p == path)

    async def get_state(self, request: web.Request) -> web.Response:
        self.requests.append(("GET", request.path, None))
        if self.fail_state is not None:
            return web.Response(status=self.fail_state)
        return web.json_response(self.state)

    async def post_power(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append(("POST", request.path, body))
        if self.fail_power is not None:
            return web.Response(status=self.fail_power)
        if not isinstance(body.get("is_on"), bool):
            return web.Response(status=HTTPStatus.BAD_REQUEST, text="Bad Request")
        self.state["is_on"] = body["is_on"]
        return web.json_response({"success": True})

    async def post_setpoint(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append(("POST", request.path, body))
        if self.fail_setpoint is not None:
            return web.Response(status=self.fail_setpoint)
        temperature = body.get("temperature")
        if not isinstance(temperature, int | float) or not 0 <= temperature <= 100:
            return web.Response(status=HTTPStatus.BAD_REQUEST, text="Bad Request")
        self.state["setpoint_temp"] = float(temperature)
        return web.json_response({"success": True})

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/state", self.get_state)
        app.router.add_post("/api/power", self.post_power)
        app.router.add_post("/api/setpoint", self.post_setpoint)
        return app


@pytest.fixture
def fake_device() -> FakeDevice:
    """Create a fake device API."""
    return FakeDevice()


@pytest.fixture
def device_app(fake_device: FakeDevice) -> web.Application:
    """Create an aiohttp application serving the fake device API."""
    return fake_device.make_app()


@pytest.fixture
def sample_state() -> DeviceState:
    """Create a sample device state."""
    return DeviceState(is_on=True, setpoint_temp=65.0, current_temp=58.3, relay_state=True)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Create a scheduler with a virtual clock."""
    return ManualScheduler()


@pytest.fixture
def reconciler() -> Reconciler:
    """Create a reconciler with a fresh model."""
    return Reconciler()


@pytest.fixture
def tracker(reconciler: Reconciler) -> ConnectivityTracker:
    """Create a connectivity tracker bound to the reconciler."""
    return ConnectivityTracker(reconciler)


@pytest.fixture
def mock_api(sample_state: DeviceState) -> AsyncMock:
    """Create a mock ThermostatAPI whose requests all succeed."""
    api = AsyncMock()
    api.get_state = AsyncMock(return_value=sample_state)
    api.set_power = AsyncMock(return_value=None)
    api.set_setpoint = AsyncMock(return_value=None)
    return api


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
def mock_response() -> MagicMock:
    """Create a mock aiohttp ClientResponse.

    Returns:
        Mock ClientResponse for testing.
    """
    response = MagicMock()
    response.status = 200
    response.headers = {}
    response.content_type = "application/json"
    return response
