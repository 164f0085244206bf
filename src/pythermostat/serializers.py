"""Serialization and deserialization of thermostat API payloads.

This module provides stateless functions for converting between raw API
payloads and typed domain models, so the API layer, the poller and the tests
share a single definition of the wire format.

Wire format:
    GET /api/state
        {"is_on": bool, "setpoint_temp": number,
         "current_temp": number | null, "relay_state": bool | null}
    POST /api/power
        {"is_on": bool}
    POST /api/setpoint
        {"temperature": number}
"""

from __future__ import annotations

from typing import Any

from pythermostat.exceptions import InvalidResponseError
from pythermostat.models import DeviceState


__all__ = [
    "deserialize_device_state",
    "serialize_power_command",
    "serialize_setpoint_command",
]


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid temperature
    return isinstance(value, int | float) and not isinstance(value, bool)


def _optional_temperature(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if not _is_number(value):
        msg = f"Field {key!r} must be a number or null, got {value!r}"
        raise InvalidResponseError(msg)
    return float(value)


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        msg = f"Field {key!r} must be a boolean or null, got {value!r}"
        raise InvalidResponseError(msg)
    return value


def deserialize_device_state(data: Any) -> DeviceState:
    """Deserialize device state from a GET /api/state response.

    Sensor fields that are missing or null map to None, so an unavailable
    sensor is never confused with a reading of 0.

    Args:
        data: Decoded JSON body.

    Returns:
        DeviceState instance.

    Raises:
        InvalidResponseError: If required fields are missing or mistyped.

    Example:
        >>> state = deserialize_device_state(
        ...     {"is_on": True, "setpoint_temp": 72.5, "current_temp": None}
        ... )
        >>> state.current_temp is None
        True
    """
    if not isinstance(data, dict):
        msg = f"State payload must be a JSON object, got {type(data).__name__}"
        raise InvalidResponseError(msg)

    is_on = data.get("is_on")
    if not isinstance(is_on, bool):
        msg = f"Field 'is_on' must be a boolean, got {is_on!r}"
        raise InvalidResponseError(msg)

    setpoint = data.get("setpoint_temp")
    if not _is_number(setpoint):
        msg = f"Field 'setpoint_temp' must be a number, got {setpoint!r}"
        raise InvalidResponseError(msg)

    return DeviceState(
        is_on=is_on,
        setpoint_temp=float(setpoint),
        current_temp=_optional_temperature(data, "current_temp"),
        relay_state=_optional_bool(data, "relay_state"),
        raw_data=dict(data),
    )


def serialize_power_command(is_on: bool) -> dict[str, bool]:
    """Serialize a power command body for POST /api/power.

    Args:
        is_on: Requested power state.

    Returns:
        Request body.
    """
    return {"is_on": is_on}


def serialize_setpoint_command(temperature: float) -> dict[str, float]:
    """Serialize a setpoint command body for POST /api/setpoint.

    Args:
        temperature: Requested target temperature in degrees Celsius.

    Returns:
        Request body.
    """
    return {"temperature": float(temperature)}
