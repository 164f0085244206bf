"""Constants for pythermostat library."""

from __future__ import annotations


# API Configuration
DEFAULT_BASE_URL = "http://192.168.4.1"  # Device access point address
API_PREFIX = "/api"
DEFAULT_TIMEOUT = 10  # seconds

# Endpoints (relative to API_PREFIX)
ENDPOINT_STATE = "/state"
ENDPOINT_POWER = "/power"
ENDPOINT_SETPOINT = "/setpoint"

# Setpoint Validation
SETPOINT_MIN = 30.0
SETPOINT_MAX = 100.0

# Synchronization Timing
DEFAULT_POLL_INTERVAL = 2.0  # seconds between state polls
DEFAULT_DEBOUNCE_DELAY = 0.3  # quiet period before a dragged setpoint is sent

# Command Types
COMMAND_POWER = "power"
COMMAND_SETPOINT = "setpoint"

# Display
TEMPERATURE_PLACEHOLDER = "--"
POWER_LABEL_ON = "On"
POWER_LABEL_OFF = "Off"
STATUS_LABEL_ONLINE = "Connected"
STATUS_LABEL_OFFLINE = "Offline"
