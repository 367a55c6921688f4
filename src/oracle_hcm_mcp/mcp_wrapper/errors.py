"""The single place where bridge errors become MCP protocol errors."""

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData

from ..bridge_core.exceptions import ErrorKind, HcmError

_ERROR_CODES = {
    ErrorKind.INVALID_PARAMS: INVALID_PARAMS,
    ErrorKind.MISSING_CONFIG: INTERNAL_ERROR,
    ErrorKind.HTTP: INTERNAL_ERROR,
    ErrorKind.INTERNAL: INTERNAL_ERROR,
}


def to_error_data(error: HcmError) -> ErrorData:
    """Convert a bridge error into the JSON-RPC error object MCP sends back.

    Args:
        error: Any error from the bridge taxonomy.

    Returns:
        ErrorData with INVALID_PARAMS for caller errors and INTERNAL_ERROR otherwise.
    """
    message = error.message
    if error.kind is ErrorKind.HTTP:
        message = f"HTTP error: {message}"
    return ErrorData(code=_ERROR_CODES[error.kind], message=message)


def to_mcp_error(error: HcmError) -> McpError:
    """Wrap a bridge error in the exception type the MCP runtime understands."""
    return McpError(to_error_data(error))
