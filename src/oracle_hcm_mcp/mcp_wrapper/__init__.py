"""MCP-facing pieces: tool descriptors and error conversion.

The server module is imported explicitly (``oracle_hcm_mcp.mcp_wrapper.server``)
because it depends on the bridge, which itself depends on this package.
"""

from .errors import to_error_data, to_mcp_error
from .registry import McpToolRegistry

__all__ = ["McpToolRegistry", "to_error_data", "to_mcp_error"]
