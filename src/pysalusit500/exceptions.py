"""Custom exceptions for pysalusit500 library.

Only ``InvalidParameterError`` and ``OperationFailedError`` ever reach library
callers. The remaining types are raised between the protocol steps of a single
portal operation and are collapsed into an opaque failed result before leaving
``SalusConnectAPI``.
"""

from __future__ import annotations

from typing import Any


class SalusError(Exception):
    """Base exception for all Salus errors."""


class SalusConnectionError(SalusError):
    """Exception raised for transport failures."""


class SalusTimeoutError(SalusConnectionError):
    """Exception raised when a portal request times out."""


class AuthenticationError(SalusError):
    """Exception raised when the portal does not hand out a session cookie."""


class TokenNotFoundError(SalusError):
    """Exception raised when the devices page carries no anti-forgery token."""


class MalformedResponseError(SalusError):
    """Exception raised when a portal response cannot be parsed."""


class OperationFailedError(SalusError):
    """Exception raised when unwrapping a failed operation result."""


class InvalidParameterError(SalusError):
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
