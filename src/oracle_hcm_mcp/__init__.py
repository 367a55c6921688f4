"""
Oracle HCM MCP bridge.

Exposes four Oracle HCM lookups (person ID, absence types, absence balances,
projected balance) as MCP tools backed by authenticated REST calls.
"""

from .bridge_core import (
    HcmConfig,
    ErrorKind,
    HcmError,
    InvalidParamsError,
    MissingConfigError,
    HttpError,
    InternalError,
    HcmHttpClient,
    RemoteCallSpec,
    ToolRegistry,
    ToolDispatcher,
    get_logger,
    setup_logging,
)
from .hcm_impl import OracleHcmBridge, OracleHcmTools
from .mcp_wrapper import McpToolRegistry, to_error_data

__version__ = "0.1.0"

__all__ = [
    "HcmConfig",
    "ErrorKind",
    "HcmError",
    "InvalidParamsError",
    "MissingConfigError",
    "HttpError",
    "InternalError",
    "HcmHttpClient",
    "RemoteCallSpec",
    "ToolRegistry",
    "ToolDispatcher",
    "get_logger",
    "setup_logging",
    "OracleHcmBridge",
    "OracleHcmTools",
    "McpToolRegistry",
    "to_error_data",
]
