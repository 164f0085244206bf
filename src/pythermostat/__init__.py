"""Python control client for networked thermostats.

This package provides an async client that mirrors a thermostat's state into
a UI-facing model, sends power and setpoint commands with optimistic updates,
and tracks connectivity from request outcomes.

The library is organized into three layers:
1. **API Layer** (pythermostat.api): Low-level HTTP communication with the device
2. **Sync Layer** (pythermostat.poller, pythermostat.dispatcher, pythermostat.debounce,
   pythermostat.reconciler, pythermostat.connectivity): polling, commands and model updates
3. **Client Layer** (pythermostat.client): Wiring and lifecycle

Example:
    Basic usage:

    ```python
    from pythermostat import ThermostatClient

    async with ThermostatClient(base_url="http://192.168.4.1") as client:
        # State is polled immediately and every 2 seconds
        print(f"Current: {client.model.current_temp_display} °C")

        # Control (with optimistic updates)
        await client.turn_on()
        await client.set_setpoint(72.5)

        print(f"Status: {client.model.status_label}")
    ```
"""

from __future__ import annotations

from pythermostat.api import ThermostatAPI
from pythermostat.client import ThermostatClient
from pythermostat.connectivity import ConnectivityTracker
from pythermostat.debounce import SetpointDebouncer
from pythermostat.dispatcher import CommandDispatcher, validate_setpoint
from pythermostat.exceptions import (
    InvalidParameterError,
    InvalidResponseError,
    ServerRejectionError,
    ThermostatConnectionError,
    ThermostatError,
    ThermostatTimeoutError,
)
from pythermostat.models import (
    ConnectivityStatus,
    ControlModel,
    DeviceState,
    PendingCommand,
    format_temperature,
)
from pythermostat.poller import StatePoller
from pythermostat.reconciler import Reconciler
from pythermostat.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from pythermostat.serializers import (
    deserialize_device_state,
    serialize_power_command,
    serialize_setpoint_command,
)


__version__ = "0.1.0"

__all__ = [
    "AsyncioScheduler",
    "CommandDispatcher",
    "ConnectivityStatus",
    "ConnectivityTracker",
    "ControlModel",
    "DeviceState",
    "InvalidParameterError",
    "InvalidResponseError",
    "ManualScheduler",
    "PendingCommand",
    "Reconciler",
    "Scheduler",
    "ServerRejectionError",
    "SetpointDebouncer",
    "StatePoller",
    "ThermostatAPI",
    "ThermostatClient",
    "ThermostatConnectionError",
    "ThermostatError",
    "ThermostatTimeoutError",
    "__version__",
    "deserialize_device_state",
    "format_temperature",
    "serialize_power_command",
    "serialize_setpoint_command",
    "validate_setpoint",
]
