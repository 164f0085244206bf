"""Data models for thermostat state, commands and the UI-facing model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pythermostat.const import (
    POWER_LABEL_OFF,
    POWER_LABEL_ON,
    SETPOINT_MIN,
    STATUS_LABEL_OFFLINE,
    STATUS_LABEL_ONLINE,
    TEMPERATURE_PLACEHOLDER,
)


__all__ = [
    "ConnectivityStatus",
    "ControlModel",
    "DeviceState",
    "PendingCommand",
    "format_temperature",
]


def format_temperature(value: float | None) -> str:
    """Format a temperature for display with one decimal place.

    Args:
        value: Temperature in degrees Celsius, or None if unavailable.

    Returns:
        Formatted temperature (e.g. "72.5"), or the placeholder when unavailable.
    """
    if value is None:
        return TEMPERATURE_PLACEHOLDER
    return f"{value:.1f}"


class ConnectivityStatus(Enum):
    """Last known outcome of a request to the device."""

    ONLINE = "online"
    OFFLINE = "offline"


@dataclass
class DeviceState:
    """Authoritative device state as reported by GET /api/state.

    Attributes:
        is_on: Whether the thermostat is enabled.
        setpoint_temp: Target temperature in degrees Celsius (30-100).
        current_temp: Measured temperature, or None when the sensor is unavailable.
        relay_state: Physical relay state, or None when the device does not report it.
        raw_data: Original API response data for debugging.
    """

    is_on: bool
    setpoint_temp: float
    current_temp: float | None = None
    relay_state: bool | None = None
    raw_data: dict[str, Any] = field(default_factory=dict)

    @property
    def has_current_temp(self) -> bool:
        """Check if the temperature sensor reported a reading."""
        return self.current_temp is not None

    @property
    def has_relay_state(self) -> bool:
        """Check if the device reported its relay state."""
        return self.relay_state is not None


@dataclass
class PendingCommand:
    """A command that has been issued but whose request has not settled.

    Attributes:
        command_type: Category of command ("power" or "setpoint").
        params: Command body as sent to the device.
        timestamp: When the command was created.
    """

    command_type: str
    params: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class ControlModel:
    """UI-facing projection of device state, connectivity and optimistic overlays.

    Only the Reconciler mutates this object. Everything else reads it.

    Attributes:
        is_on: Power state (optimistic until the next reconciliation).
        setpoint_temp: Target temperature (optimistic until the next reconciliation).
        current_temp: Measured temperature; only ever written from polled state.
        relay_state: Relay state; only ever written from polled state.
        connectivity: Outcome of the most recent request.
        last_remote_update: When authoritative state was last applied.
    """

    is_on: bool = False
    setpoint_temp: float = SETPOINT_MIN
    current_temp: float | None = None
    relay_state: bool | None = None
    connectivity: ConnectivityStatus = ConnectivityStatus.OFFLINE
    last_remote_update: datetime | None = None

    @property
    def is_online(self) -> bool:
        """Check if the last request succeeded."""
        return self.connectivity is ConnectivityStatus.ONLINE

    @property
    def has_remote_state(self) -> bool:
        """Check if authoritative state has been applied at least once."""
        return self.last_remote_update is not None

    @property
    def setpoint_display(self) -> str:
        """Get the setpoint formatted for display."""
        return format_temperature(self.setpoint_temp)

    @property
    def current_temp_display(self) -> str:
        """Get the measured temperature formatted for display.

        An unavailable sensor renders as the placeholder, never as 0.
        """
        return format_temperature(self.current_temp)

    @property
    def power_label(self) -> str:
        """Get the power switch label."""
        return POWER_LABEL_ON if self.is_on else POWER_LABEL_OFF

    @property
    def status_label(self) -> str:
        """Get the connectivity indicator label."""
        return STATUS_LABEL_ONLINE if self.is_online else STATUS_LABEL_OFFLINE
