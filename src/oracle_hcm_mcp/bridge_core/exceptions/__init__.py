"""Export the bridge error taxonomy and the tool-table exceptions."""

from .exceptions import (
    ErrorKind,
    HcmError,
    InvalidParamsError,
    MissingConfigError,
    HttpError,
    InternalError,
    ToolError,
    ToolRegistrationError,
    ToolValidationError,
    ToolNotFoundError,
)

__all__ = [
    "ErrorKind",
    "HcmError",
    "InvalidParamsError",
    "MissingConfigError",
    "HttpError",
    "InternalError",
    "ToolError",
    "ToolRegistrationError",
    "ToolValidationError",
    "ToolNotFoundError",
]
