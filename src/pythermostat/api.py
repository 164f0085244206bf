"""Low-level API client for the thermostat's REST endpoints.

This module provides direct HTTP communication with the device. The generic
``request`` method returns (status_code, response_data) tuples; the endpoint
methods build on it and raise typed exceptions so callers can collapse every
failure into a single "request failed" outcome.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from pythermostat.const import (
    API_PREFIX,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ENDPOINT_POWER,
    ENDPOINT_SETPOINT,
    ENDPOINT_STATE,
)
from pythermostat.exceptions import (
    InvalidResponseError,
    ServerRejectionError,
    ThermostatConnectionError,
    ThermostatTimeoutError,
)
from pythermostat.serializers import (
    deserialize_device_state,
    serialize_power_command,
    serialize_setpoint_command,
)


if TYPE_CHECKING:
    from types import TracebackType

    from pythermostat.models import DeviceState

_LOGGER = logging.getLogger(__name__)


def _is_success(status: int) -> bool:
    return HTTPStatus.OK <= status < HTTPStatus.MULTIPLE_CHOICES


class ThermostatAPI:
    """Low-level API client for the thermostat.

    Example:
        ```python
        from pythermostat.api import ThermostatAPI

        async with ThermostatAPI(base_url="http://192.168.4.1") as api:
            state = await api.get_state()
            await api.set_power(True)
            await api.set_setpoint(72.5)
        ```

    Attributes:
        base_url: Base URL of the device (default: http://192.168.4.1).
    """

    def __init__(
        self,
        *,
        session: ClientSession | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the API client.

        Args:
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            base_url: Base URL of the device.
            timeout: Total timeout for a single request in seconds.
        """
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        """Get the device base URL."""
        return self._base_url

    async def __aenter__(self) -> ThermostatAPI:
        """Enter the context manager, creating a session if needed."""
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Closes session if it was created by this client.
        """
        await self.close()

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_data: dict[str, Any] | None = None,
    ) -> tuple[int, Any]:
        """Make an API request.

        Args:
            method: HTTP method (GET or POST).
            endpoint: Endpoint path below the API prefix (e.g., "/state").
            json_data: Optional JSON data for request body.

        Returns:
            Tuple of (status_code, response_data). Response data is None for
            non-success responses and an empty dict for non-JSON success bodies.

        Raises:
            ThermostatTimeoutError: If the request times out.
            ThermostatConnectionError: If the device cannot be reached or the
                session is missing or closed.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise ThermostatConnectionError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make request."
            raise ThermostatConnectionError(msg)

        url = f"{self._base_url}{API_PREFIX}{endpoint}"
        timeout = ClientTimeout(total=self._timeout)
        _LOGGER.debug("%s %s %s", method, url, json_data if json_data is not None else "")

        try:
            async with self._session.request(method, url, json=json_data, timeout=timeout) as response:
                response_data = None
                if _is_success(response.status):
                    # Substring match handles charset parameters
                    if "application/json" in response.content_type:
                        try:
                            response_data = await response.json()
                        except ValueError as err:
                            msg = f"Malformed JSON from {url}"
                            raise InvalidResponseError(msg) from err
                    else:
                        response_data = {}
                return response.status, response_data

        except TimeoutError as err:
            _LOGGER.debug("Request to %s timed out", url)
            msg = f"Request to {url} timed out"
            raise ThermostatTimeoutError(msg) from err

        except ClientError as err:
            _LOGGER.debug("Connection error for %s: %s", url, err)
            msg = f"Connection error for {url}: {err}"
            raise ThermostatConnectionError(msg) from err

    @staticmethod
    def _raise_for_status(status: int, endpoint: str) -> None:
        if not _is_success(status):
            msg = f"{endpoint} rejected with HTTP {status}"
            raise ServerRejectionError(msg, status=status)

    # -------------------------------------------------------------------------
    # Device Endpoints
    # -------------------------------------------------------------------------

    async def get_state(self) -> DeviceState:
        """Read the current device state.

        Returns:
            Decoded DeviceState.

        Raises:
            ServerRejectionError: If the device answers with a non-success status.
            InvalidResponseError: If the payload cannot be decoded.
            ThermostatTimeoutError: If the request times out.
            ThermostatConnectionError: If the device cannot be reached.
        """
        status, data = await self.request("GET", ENDPOINT_STATE)
        self._raise_for_status(status, ENDPOINT_STATE)
        if not data:
            msg = f"{ENDPOINT_STATE} returned an empty or non-JSON body"
            raise InvalidResponseError(msg)
        return deserialize_device_state(data)

    async def set_power(self, is_on: bool) -> None:
        """Send a power command.

        Args:
            is_on: Requested power state.

        Raises:
            ServerRejectionError: If the device answers with a non-success status.
            ThermostatTimeoutError: If the request times out.
            ThermostatConnectionError: If the device cannot be reached.
        """
        status, _ = await self.request("POST", ENDPOINT_POWER, json_data=serialize_power_command(is_on))
        self._raise_for_status(status, ENDPOINT_POWER)

    async def set_setpoint(self, temperature: float) -> None:
        """Send a setpoint command.

        The device is the final arbiter of range validity and answers 400 for
        values it does not accept.

        Args:
            temperature: Requested target temperature in degrees Celsius.

        Raises:
            ServerRejectionError: If the device answers with a non-success status.
            ThermostatTimeoutError: If the request times out.
            ThermostatConnectionError: If the device cannot be reached.
        """
        status, _ = await self.request(
            "POST",
            ENDPOINT_SETPOINT,
            json_data=serialize_setpoint_command(temperature),
        )
        self._raise_for_status(status, ENDPOINT_SETPOINT)
