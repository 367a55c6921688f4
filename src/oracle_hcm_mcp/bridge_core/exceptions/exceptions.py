"""
Exception classes for the Oracle HCM bridge.

Two families live here. ``HcmError`` and its subclasses form the closed error
taxonomy every tool call can end in; each carries an ``ErrorKind`` tag so the
protocol layer can map it to a wire error code in one place. ``ToolError`` and
its subclasses cover problems with the tool table itself (registration,
schema generation, lookup).
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Tag identifying which branch of the error taxonomy an error belongs to."""

    INVALID_PARAMS = "invalid_params"
    MISSING_CONFIG = "missing_config"
    HTTP = "http"
    INTERNAL = "internal"


class HcmError(Exception):
    """Base exception for all errors surfaced by a bridge tool call."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidParamsError(HcmError):
    """Raised when caller input is empty/malformed or a lookup legitimately finds nothing."""

    kind = ErrorKind.INVALID_PARAMS


class MissingConfigError(HcmError):
    """Raised when a required configuration value is absent or unusable."""

    kind = ErrorKind.MISSING_CONFIG

    def __init__(self, variable: str, reason: str = "must be set") -> None:
        super().__init__(f"{variable} {reason}")
        self.variable = variable


class HttpError(HcmError):
    """Raised when the remote API cannot be reached at the transport level."""

    kind = ErrorKind.HTTP


class InternalError(HcmError):
    """Raised for non-2xx responses, malformed JSON, or a missing required response field."""

    kind = ErrorKind.INTERNAL


class ToolError(Exception):
    """Base exception for all tool-table errors."""

    pass


class ToolRegistrationError(ToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolValidationError(ToolError):
    """Raised when a tool definition is invalid."""

    pass


class ToolNotFoundError(ToolError, InvalidParamsError):
    """Raised when a requested tool is not found in the registry."""

    pass
