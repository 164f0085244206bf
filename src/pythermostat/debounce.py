"""Trailing-edge debounce for continuous setpoint input.

While a slider is being dragged every intermediate value is shown locally,
but only the value still present after a quiet period is sent to the device:

    input(40.0)  t=0.00   display 40.0, window opens
    input(45.0)  t=0.05   display 45.0, window restarts
    input(50.0)  t=0.10   display 50.0, window restarts
                 t=0.40   set_setpoint(50.0)

A discrete commit (button press, pointer release) skips the wait.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythermostat.const import DEFAULT_DEBOUNCE_DELAY
from pythermostat.dispatcher import validate_setpoint


if TYPE_CHECKING:
    from pythermostat.dispatcher import CommandDispatcher
    from pythermostat.reconciler import Reconciler
    from pythermostat.scheduler import Scheduler

_LOGGER = logging.getLogger(__name__)


class SetpointDebouncer:
    """Coalesces rapid setpoint input into a single trailing command.

    Each ``input`` cancels the pending timer and starts a new one; N inputs
    inside the window produce exactly one ``set_setpoint`` carrying the last
    value. At most one setpoint command is pending per window.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        reconciler: Reconciler,
        scheduler: Scheduler,
        *,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
    ) -> None:
        """Initialize the debouncer.

        Args:
            dispatcher: Sends the final setpoint.
            reconciler: Receives intermediate values for display.
            scheduler: Provides the one-shot timer.
            delay: Quiet period in seconds before the value is sent.
        """
        self._dispatcher = dispatcher
        self._reconciler = reconciler
        self._scheduler = scheduler
        self._delay = delay
        self._timer_id: int | None = None
        self._pending_value: float | None = None

    @property
    def delay(self) -> float:
        """Get the quiet period in seconds."""
        return self._delay

    @property
    def is_pending(self) -> bool:
        """Check if a debounce window is open."""
        return self._timer_id is not None

    @property
    def pending_value(self) -> float | None:
        """Get the value that will be sent when the window closes."""
        return self._pending_value if self.is_pending else None

    def input(self, temperature: float) -> None:
        """Record an intermediate value and restart the quiet period.

        Only the local display changes; no request is made.

        Args:
            temperature: Current value of the continuous control.

        Raises:
            InvalidParameterError: If the value is outside 30-100. The display
                and any open window are left untouched.
        """
        value = validate_setpoint(temperature)
        self._reconciler.apply_optimistic_setpoint(value)
        self._pending_value = value

        if self._timer_id is not None:
            self._scheduler.cancel(self._timer_id)
        self._timer_id = self._scheduler.schedule_once(self._delay, self._fire)

    async def commit(self, temperature: float | None = None) -> bool:
        """Send a setpoint immediately, closing any open window.

        Args:
            temperature: Value to send. Defaults to the last input value.

        Returns:
            True if the device accepted the command, False otherwise
            (including when there is nothing to send).

        Raises:
            InvalidParameterError: If the value is outside 30-100. Any open
                window is left untouched.
        """
        value = temperature if temperature is not None else self._pending_value
        if value is not None:
            validate_setpoint(value)
        self.cancel()
        if value is None:
            _LOGGER.debug("Commit requested with no setpoint to send")
            return False
        return await self._dispatcher.set_setpoint(value)

    def cancel(self) -> bool:
        """Close the open window without sending anything.

        Returns:
            True if a window was open.
        """
        self._pending_value = None
        if self._timer_id is None:
            return False
        self._scheduler.cancel(self._timer_id)
        self._timer_id = None
        return True

    async def _fire(self) -> bool:
        value = self._pending_value
        self._timer_id = None
        self._pending_value = None
        if value is None:
            return False
        _LOGGER.debug("Debounce window closed, sending setpoint %.1f", value)
        return await self._dispatcher.set_setpoint(value)
