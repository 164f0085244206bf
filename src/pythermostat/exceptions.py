"""Custom exceptions for pythermostat library."""

from __future__ import annotations

from typing import Any


class ThermostatError(Exception):
    """Base exception for all thermostat errors."""


class ThermostatConnectionError(ThermostatError):
    """Exception raised when the device cannot be reached."""


class ThermostatTimeoutError(ThermostatError):
    """Exception raised when a request to the device times out."""


class ServerRejectionError(ThermostatError):
    """Exception raised when the device answers with a non-success status.

    Attributes:
        status: HTTP status code returned by the device.
    """

    def __init__(self, message: str = "", status: int | None = None) -> None:
        """Initialize ServerRejectionError.

        Args:
            message: Error message.
            status: HTTP status code returned by the device.
        """
        super().__init__(message)
        self.status = status


class InvalidResponseError(ThermostatError):
    """Exception raised when a state payload cannot be decoded."""


class InvalidParameterError(ThermostatError):
    """Exception raised for invalid parameter values.

    Attributes:
        parameter_name: Optional name of the invalid parameter.
        value: Optional value that was invalid.
    """

    def __init__(
        self,
        message: str = "",
        parameter_name: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize InvalidParameterError.

        Args:
            message: Error message.
            parameter_name: Optional name of the invalid parameter.
            value: Optional value that was invalid.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value
