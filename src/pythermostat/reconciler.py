"""Owner of the UI-facing control model.

Every change to the ``ControlModel`` goes through one of the Reconciler's
entry points:

- ``apply_remote_state``: authoritative state from a poll, overwrites everything
- ``apply_optimistic_power`` / ``rollback_power``: power switch overlay
- ``apply_optimistic_setpoint``: setpoint overlay (never rolled back)
- ``apply_connectivity``: status indicator

Listeners are notified after each mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pythermostat.models import ConnectivityStatus, ControlModel, DeviceState


_LOGGER = logging.getLogger(__name__)

ModelListener = Callable[[ControlModel], None]


class Reconciler:
    """Merges authoritative and optimistic state into the control model.

    Remote state always wins: ``apply_remote_state`` overwrites power,
    setpoint, temperature and relay fields unconditionally, whatever
    optimistic overlay was in place. Responses are applied in arrival order,
    so when a poll and a command refresh overlap the last response to land
    determines the model.
    """

    def __init__(self, model: ControlModel | None = None) -> None:
        """Initialize the reconciler.

        Args:
            model: Model to own. A fresh ControlModel is created if omitted.
        """
        self._model = model if model is not None else ControlModel()
        self._listeners: list[ModelListener] = []

    @property
    def model(self) -> ControlModel:
        """Get the control model (read it, do not mutate it)."""
        return self._model

    def apply_remote_state(self, state: DeviceState) -> None:
        """Overwrite the model with authoritative device state.

        Args:
            state: State decoded from GET /api/state.
        """
        model = self._model
        if model.is_on != state.is_on or model.setpoint_temp != state.setpoint_temp:
            _LOGGER.debug(
                "Reconciling model (is_on=%s, setpoint=%.1f) to remote (is_on=%s, setpoint=%.1f)",
                model.is_on,
                model.setpoint_temp,
                state.is_on,
                state.setpoint_temp,
            )

        model.is_on = state.is_on
        model.setpoint_temp = state.setpoint_temp
        model.current_temp = state.current_temp
        model.relay_state = state.relay_state
        model.last_remote_update = datetime.now(UTC)
        self._notify_listeners()

    def apply_optimistic_power(self, is_on: bool) -> bool:
        """Show the requested power state before the device confirms it.

        Args:
            is_on: Requested power state.

        Returns:
            The previous power state, for ``rollback_power``.
        """
        previous = self._model.is_on
        self._model.is_on = is_on
        self._notify_listeners()
        return previous

    def rollback_power(self, previous: bool) -> None:
        """Restore the power state saved by ``apply_optimistic_power``.

        Args:
            previous: Value returned by ``apply_optimistic_power``.
        """
        _LOGGER.debug("Rolling back optimistic power state to %s", previous)
        self._model.is_on = previous
        self._notify_listeners()

    def apply_optimistic_setpoint(self, temperature: float) -> None:
        """Show a requested setpoint before the device confirms it.

        Args:
            temperature: Requested target temperature.
        """
        self._model.setpoint_temp = temperature
        self._notify_listeners()

    def apply_connectivity(self, status: ConnectivityStatus) -> None:
        """Set the connectivity indicator.

        Args:
            status: Outcome of the most recent request.
        """
        self._model.connectivity = status
        self._notify_listeners()

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, callback: ModelListener) -> None:
        """Register a callback to be called when the model changes.

        Args:
            callback: Callable that takes the ControlModel.
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: ModelListener) -> None:
        """Unregister a model change callback.

        Args:
            callback: Previously registered callback to remove.
        """
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self) -> None:
        """Notify listeners in registration order; failures are logged and skipped."""
        for listener in list(self._listeners):
            try:
                listener(self._model)
            except Exception:
                _LOGGER.exception("Error in model change listener")
