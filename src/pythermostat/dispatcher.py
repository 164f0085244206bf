"""Power and setpoint commands with optimistic updates."""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pythermostat.const import COMMAND_POWER, COMMAND_SETPOINT, SETPOINT_MAX, SETPOINT_MIN
from pythermostat.exceptions import InvalidParameterError, ThermostatError
from pythermostat.models import PendingCommand


if TYPE_CHECKING:
    from pythermostat.api import ThermostatAPI
    from pythermostat.connectivity import ConnectivityTracker
    from pythermostat.reconciler import Reconciler

_LOGGER = logging.getLogger(__name__)

RefreshCallback = Callable[[], Awaitable[bool]]


def validate_setpoint(temperature: float) -> float:
    """Check that a setpoint lies within the accepted range.

    Args:
        temperature: Requested target temperature in degrees Celsius.

    Returns:
        The temperature as a float.

    Raises:
        InvalidParameterError: If the value is NaN or outside 30-100.
    """
    value = float(temperature)
    if math.isnan(value) or not SETPOINT_MIN <= value <= SETPOINT_MAX:
        msg = f"Setpoint must be {SETPOINT_MIN:.0f}-{SETPOINT_MAX:.0f}, got {temperature}"
        raise InvalidParameterError(msg, parameter_name="temperature", value=temperature)
    return value


class CommandDispatcher:
    """Sends commands to the device, updating the model optimistically.

    Both commands show the requested value immediately and trigger a full
    state refresh when the device accepts them. They differ on failure:

    - power: the switch snaps back to its previous value
    - setpoint: the requested value stays on display until the next
      successful poll replaces it

    Each command reports its own outcome to the connectivity tracker exactly
    once. Request failures are logged and returned as False, never raised.
    """

    def __init__(
        self,
        api: ThermostatAPI,
        reconciler: Reconciler,
        tracker: ConnectivityTracker,
        refresh: RefreshCallback,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            api: API client used to send commands.
            reconciler: Owner of the model receiving optimistic updates.
            tracker: Receives the outcome of every command.
            refresh: Coroutine function performing a full state refresh,
                typically ``StatePoller.poll``.
        """
        self._api = api
        self._reconciler = reconciler
        self._tracker = tracker
        self._refresh = refresh
        self._pending: list[PendingCommand] = []

    @property
    def pending_commands(self) -> list[PendingCommand]:
        """Get commands whose requests have not settled yet."""
        return list(self._pending)

    @property
    def pending_count(self) -> int:
        """Get number of commands whose requests have not settled yet."""
        return len(self._pending)

    async def set_power(self, is_on: bool) -> bool:
        """Turn the thermostat on or off.

        Args:
            is_on: Requested power state.

        Returns:
            True if the device accepted the command, False otherwise.
        """
        previous = self._reconciler.apply_optimistic_power(is_on)

        success = await self._send(
            PendingCommand(command_type=COMMAND_POWER, params={"is_on": is_on}),
            self._api.set_power(is_on),
        )

        if not success:
            self._reconciler.rollback_power(previous)
            return False

        await self._refresh()
        return True

    async def set_setpoint(self, temperature: float) -> bool:
        """Change the target temperature.

        Args:
            temperature: Requested target temperature (30-100).

        Returns:
            True if the device accepted the command, False otherwise.

        Raises:
            InvalidParameterError: If the temperature is outside the accepted
                range. No request is made in that case.
        """
        value = validate_setpoint(temperature)
        self._reconciler.apply_optimistic_setpoint(value)

        success = await self._send(
            PendingCommand(command_type=COMMAND_SETPOINT, params={"temperature": value}),
            self._api.set_setpoint(value),
        )

        if not success:
            return False

        await self._refresh()
        return True

    async def _send(self, command: PendingCommand, request: Awaitable[None]) -> bool:
        """Await a command request, track it while pending and record its outcome."""
        self._pending.append(command)
        _LOGGER.debug("Sending %s command: %s", command.command_type, command.params)
        try:
            await request
        except ThermostatError as err:
            _LOGGER.warning("Failed to send %s command %s: %s", command.command_type, command.params, err)
            success = False
        else:
            _LOGGER.debug("Command %s accepted: %s", command.command_type, command.params)
            success = True
        finally:
            self._pending.remove(command)

        self._tracker.record_outcome(success)
        return success
