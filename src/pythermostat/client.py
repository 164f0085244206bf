"""High-level thermostat client.

This module wires the API layer, the reconciler, the connectivity tracker,
the poller, the command dispatcher and the setpoint debouncer into a single
object with an async context manager lifecycle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythermostat.api import ThermostatAPI
from pythermostat.connectivity import ConnectivityTracker
from pythermostat.const import (
    DEFAULT_BASE_URL,
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
)
from pythermostat.debounce import SetpointDebouncer
from pythermostat.dispatcher import CommandDispatcher
from pythermostat.poller import StatePoller
from pythermostat.reconciler import ModelListener, Reconciler
from pythermostat.scheduler import AsyncioScheduler


if TYPE_CHECKING:
    from types import TracebackType

    from aiohttp import ClientSession

    from pythermostat.models import ConnectivityStatus, ControlModel, PendingCommand
    from pythermostat.scheduler import Scheduler

_LOGGER = logging.getLogger(__name__)


class ThermostatClient:
    """Control client for a networked thermostat.

    Entering the context manager polls the device once and then every
    ``poll_interval`` seconds. The ``model`` always holds the latest known
    state with optimistic overlays from pending commands.

    Example:
        Basic usage:

        ```python
        from pythermostat import ThermostatClient

        async with ThermostatClient(base_url="http://192.168.4.1") as client:
            print(client.model.status_label, client.model.current_temp_display)

            await client.turn_on()
            await client.set_setpoint(72.5)
        ```

        Slider wiring with change notifications:

        ```python
        def on_change(model: ControlModel) -> None:
            print(model.power_label, model.setpoint_display, model.status_label)


        async with ThermostatClient() as client:
            client.add_listener(on_change)

            # While dragging: display only, one request after 300 ms of quiet
            client.input_setpoint(60.0)
            client.input_setpoint(65.0)

            # On release: send immediately
            await client.commit_setpoint()
        ```

    Attributes:
        api: Low-level ThermostatAPI instance for HTTP communication.
        model: UI-facing ControlModel.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the device.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            timeout: Total timeout for a single request in seconds.
            poll_interval: Seconds between state polls.
            debounce_delay: Quiet period in seconds before dragged setpoints are sent.
            scheduler: Optional Scheduler. Defaults to an AsyncioScheduler.
        """
        self._api = ThermostatAPI(session=session, base_url=base_url, timeout=timeout)
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()

        self._reconciler = Reconciler()
        self._tracker = ConnectivityTracker(self._reconciler)
        self._poller = StatePoller(
            self._api,
            self._reconciler,
            self._tracker,
            self._scheduler,
            interval=poll_interval,
        )
        self._dispatcher = CommandDispatcher(
            self._api,
            self._reconciler,
            self._tracker,
            self._poller.poll,
        )
        self._debouncer = SetpointDebouncer(
            self._dispatcher,
            self._reconciler,
            self._scheduler,
            delay=debounce_delay,
        )

    async def __aenter__(self) -> ThermostatClient:
        """Enter the context manager.

        Creates session if needed and starts polling.

        Returns:
            Self for use in async with statements.
        """
        await self._api.__aenter__()
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Stops polling, drops any open debounce window and closes the API client.
        """
        await self.stop()
        await self._api.__aexit__(exc_type, exc_val, exc_tb)

    async def start(self) -> bool:
        """Start polling the device.

        Returns:
            Outcome of the initial poll.
        """
        _LOGGER.debug("Starting thermostat client for %s", self._api.base_url)
        return await self._poller.start()

    async def stop(self) -> None:
        """Stop polling and cancel all timers."""
        self._debouncer.cancel()
        self._poller.stop()
        await self._scheduler.shutdown()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def api(self) -> ThermostatAPI:
        """Get the underlying API client."""
        return self._api

    @property
    def model(self) -> ControlModel:
        """Get the UI-facing model."""
        return self._reconciler.model

    @property
    def status(self) -> ConnectivityStatus:
        """Get the connectivity status."""
        return self._tracker.status

    @property
    def is_online(self) -> bool:
        """Check if the last request succeeded."""
        return self._tracker.is_online

    @property
    def is_polling(self) -> bool:
        """Check if periodic polling is active."""
        return self._poller.is_running

    @property
    def pending_commands(self) -> list[PendingCommand]:
        """Get commands whose requests have not settled yet."""
        return self._dispatcher.pending_commands

    @property
    def pending_setpoint(self) -> float | None:
        """Get the setpoint waiting for its debounce window to close."""
        return self._debouncer.pending_value

    async def refresh(self) -> bool:
        """Read device state immediately.

        Returns:
            True if state was read and applied, False otherwise.
        """
        return await self._poller.poll()

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    async def set_power(self, is_on: bool) -> bool:
        """Set power state with optimistic update and rollback on failure.

        Args:
            is_on: True to turn on, False to turn off.

        Returns:
            True if the device accepted the command, False otherwise.
        """
        return await self._dispatcher.set_power(is_on)

    async def turn_on(self) -> bool:
        """Turn the thermostat on."""
        return await self.set_power(True)

    async def turn_off(self) -> bool:
        """Turn the thermostat off."""
        return await self.set_power(False)

    async def set_setpoint(self, temperature: float) -> bool:
        """Send a setpoint immediately.

        Any open debounce window is dropped so an older dragged value cannot
        overwrite this one.

        Args:
            temperature: Target temperature (30-100).

        Returns:
            True if the device accepted the command, False otherwise.

        Raises:
            InvalidParameterError: If the temperature is outside 30-100.
        """
        return await self._debouncer.commit(temperature)

    def input_setpoint(self, temperature: float) -> None:
        """Feed an intermediate value from a continuous control.

        Args:
            temperature: Current control value (30-100).

        Raises:
            InvalidParameterError: If the temperature is outside 30-100.
        """
        self._debouncer.input(temperature)

    async def commit_setpoint(self, temperature: float | None = None) -> bool:
        """Send the dragged setpoint without waiting for the quiet period.

        Args:
            temperature: Value to send. Defaults to the last input value.

        Returns:
            True if the device accepted the command, False otherwise.
        """
        return await self._debouncer.commit(temperature)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, callback: ModelListener) -> None:
        """Register a callback to be called when the model changes."""
        self._reconciler.add_listener(callback)

    def remove_listener(self, callback: ModelListener) -> None:
        """Unregister a model change callback."""
        self._reconciler.remove_listener(callback)

    def __repr__(self) -> str:
        """Return detailed string representation of the client."""
        return f"ThermostatClient(base_url='{self._api.base_url}', status={self.status.value})"
