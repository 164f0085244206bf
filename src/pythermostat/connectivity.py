"""Connectivity status derived from request outcomes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pythermostat.models import ConnectivityStatus


if TYPE_CHECKING:
    from pythermostat.reconciler import Reconciler

_LOGGER = logging.getLogger(__name__)


class ConnectivityTracker:
    """Reduces every request outcome to an online/offline flag.

    The status is the outcome of the most recent request from any source
    (poll, power command or setpoint command). There is no hysteresis: one
    failure flips to offline, one success flips back.
    """

    def __init__(self, reconciler: Reconciler) -> None:
        """Initialize the tracker.

        Args:
            reconciler: Reconciler owning the model whose indicator is updated.
        """
        self._reconciler = reconciler

    @property
    def status(self) -> ConnectivityStatus:
        """Get the current connectivity status."""
        return self._reconciler.model.connectivity

    @property
    def is_online(self) -> bool:
        """Check if the last request succeeded."""
        return self.status is ConnectivityStatus.ONLINE

    def record_outcome(self, success: bool) -> ConnectivityStatus:
        """Record the outcome of a request.

        Args:
            success: Whether the request completed with a success status.

        Returns:
            The new connectivity status.
        """
        status = ConnectivityStatus.ONLINE if success else ConnectivityStatus.OFFLINE
        if status is not self.status:
            _LOGGER.info("Device is now %s", status.value)
        self._reconciler.apply_connectivity(status)
        return status
