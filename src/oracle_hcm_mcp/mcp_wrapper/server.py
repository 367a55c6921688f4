"""Serve the Oracle HCM bridge over MCP (streamable HTTP or stdio)."""

import contextlib
import json
import os
import sys
from typing import Any, AsyncIterator, Dict, List, Optional

import anyio
import uvicorn
from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from ..bridge_core.exceptions import HcmError, MissingConfigError
from ..bridge_core.logger import get_logger, setup_logging
from ..hcm_impl.bridge import OracleHcmBridge
from .errors import to_mcp_error
from .registry import McpToolRegistry

logger = get_logger(__name__)

SERVER_NAME = "oracle-hcm-mcp"
SERVER_INSTRUCTIONS = "Oracle HCM (also known as People HQ at Westpac) MCP Server with tools"
MCP_PATH = "/mcp"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

__all__ = ["HcmMcpServer", "build_server", "build_http_app", "main"]


class HcmMcpServer:
    """
    MCP handlers for an OracleHcmBridge.

    Bridge errors leave this class only as ``McpError`` carrying the
    converted ErrorData; successful calls return the tool's structured dict.
    """

    def __init__(self, bridge: OracleHcmBridge) -> None:
        """Initialize the handlers.

        Args:
            bridge: The bridge whose registry must be an McpToolRegistry.

        Raises:
            TypeError: If the bridge publishes its tools into another registry type.
        """
        if not isinstance(bridge.registry, McpToolRegistry):
            raise TypeError("HcmMcpServer requires a bridge built with an McpToolRegistry.")
        self.bridge = bridge

    async def list_tools(self) -> List[types.Tool]:
        return self.bridge.registry.tool_object

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Run one tool.

        Raises:
            McpError: With INVALID_PARAMS or INTERNAL_ERROR, converted from the bridge error.
        """
        try:
            return await self.bridge.call_tool(name, arguments)
        except HcmError as e:
            raise to_mcp_error(e) from e

    async def handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """Answer a ``tools/call`` request.

        Registered directly as the request handler so that ``McpError`` reaches
        the session and is sent as the JSON-RPC error with its code.
        """
        result = await self.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=json.dumps(result))],
                structuredContent=result,
                isError=False,
            )
        )


def build_server(bridge: OracleHcmBridge) -> Server:
    """Create the low-level MCP server with the bridge's handlers registered."""
    handlers = HcmMcpServer(bridge)
    server: Server = Server(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)
    server.list_tools()(handlers.list_tools)
    server.request_handlers[types.CallToolRequest] = handlers.handle_call_tool
    return server


def build_http_app(bridge: OracleHcmBridge) -> Starlette:
    """Mount the streamable HTTP transport at ``/mcp``; the bridge is closed on shutdown."""
    session_manager = StreamableHTTPSessionManager(app=build_server(bridge))

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("Oracle HCM MCP server started, endpoint %s", MCP_PATH)
            try:
                yield
            finally:
                logger.info("Oracle HCM MCP server shutting down...")
                await bridge.aclose()

    return Starlette(routes=[Mount(MCP_PATH, app=handle_streamable_http)], lifespan=lifespan)


async def _serve_stdio(bridge: OracleHcmBridge) -> None:
    server = build_server(bridge)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await bridge.aclose()


def main() -> None:
    """Console entry point: load ``.env``, configure logging, build the bridge and serve."""
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO").upper())

    logger.info("Oracle HCM MCP Server starting...")
    try:
        bridge = OracleHcmBridge.from_env()
    except MissingConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    transport = os.getenv("MCP_TRANSPORT", "http").lower()
    if transport == "stdio":
        anyio.run(_serve_stdio, bridge)
    elif transport == "http":
        host = os.getenv("HOST", DEFAULT_HOST)
        port = int(os.getenv("PORT", str(DEFAULT_PORT)))
        logger.info("Bind address: %s:%d", host, port)
        uvicorn.run(build_http_app(bridge), host=host, port=port, log_config=None)
    else:
        logger.error("Unknown MCP_TRANSPORT %r, expected 'http' or 'stdio'.", transport)
        sys.exit(2)


if __name__ == "__main__":
    main()
