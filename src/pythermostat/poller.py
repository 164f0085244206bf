"""Periodic state polling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythermostat.const import DEFAULT_POLL_INTERVAL
from pythermostat.exceptions import ThermostatError


if TYPE_CHECKING:
    from pythermostat.api import ThermostatAPI
    from pythermostat.connectivity import ConnectivityTracker
    from pythermostat.reconciler import Reconciler
    from pythermostat.scheduler import Scheduler

_LOGGER = logging.getLogger(__name__)


class StatePoller:
    """Reads device state on a fixed cadence and feeds it to the Reconciler.

    The poller is the only path by which measured temperature and relay state
    reach the model. Failed polls leave the model untouched and flip the
    connectivity indicator; the next tick is the retry, with no backoff.

    Example:
        ```python
        poller = StatePoller(api, reconciler, tracker, scheduler)
        await poller.start()  # immediate poll, then every 2 seconds
        ...
        poller.stop()
        ```
    """

    def __init__(
        self,
        api: ThermostatAPI,
        reconciler: Reconciler,
        tracker: ConnectivityTracker,
        scheduler: Scheduler,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the poller.

        Args:
            api: API client used to read state.
            reconciler: Receives decoded state.
            tracker: Receives the outcome of every poll.
            scheduler: Provides the repeating timer.
            interval: Seconds between polls.
        """
        self._api = api
        self._reconciler = reconciler
        self._tracker = tracker
        self._scheduler = scheduler
        self._interval = interval
        self._timer_id: int | None = None

    @property
    def interval(self) -> float:
        """Get the polling interval in seconds."""
        return self._interval

    @property
    def is_running(self) -> bool:
        """Check if the repeating poll timer is active."""
        return self._timer_id is not None

    async def start(self) -> bool:
        """Start polling: one immediate poll, then one every interval.

        Calling ``start`` while running restarts the cadence.

        Returns:
            Outcome of the immediate poll.
        """
        self.stop()
        self._timer_id = self._scheduler.schedule_repeating(self._interval, self.poll)
        _LOGGER.info("Started state polling (interval: %.1fs)", self._interval)
        return await self.poll()

    def stop(self) -> None:
        """Stop the repeating poll timer. In-flight polls are left to finish."""
        if self._timer_id is not None:
            self._scheduler.cancel(self._timer_id)
            self._timer_id = None
            _LOGGER.info("Stopped state polling")

    async def poll(self) -> bool:
        """Read state once and apply it.

        Returns:
            True if state was read and applied, False otherwise.
        """
        try:
            state = await self._api.get_state()
        except ThermostatError as err:
            _LOGGER.warning("Failed to poll device state: %s", err)
            self._tracker.record_outcome(False)
            return False

        self._reconciler.apply_remote_state(state)
        self._tracker.record_outcome(True)
        return True
