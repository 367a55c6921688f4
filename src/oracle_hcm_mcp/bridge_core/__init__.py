"""Public exports for the bridge core: config, HTTP client, errors and the tool table."""

from .config import HcmConfig
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
from .http import HcmHttpClient, RemoteCallSpec
from .logger import get_logger, setup_logging
from .tools import (
    ToolDefinition,
    ToolCallRequest,
    ToolCallResult,
    ToolRegistry,
    ToolDispatcher,
    SchemaValidator,
)

__all__ = [
    "HcmConfig",
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
    "HcmHttpClient",
    "RemoteCallSpec",
    "get_logger",
    "setup_logging",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
]
