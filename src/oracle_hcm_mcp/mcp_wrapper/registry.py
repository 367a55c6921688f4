"""Render the tool table as MCP tool descriptors."""

from typing import List

from mcp import types

from ..bridge_core.tools import ToolRegistry


class McpToolRegistry(ToolRegistry):
    """
    A ToolRegistry whose ``tool_object`` is the ``tools/list`` payload of an MCP server.
    """

    @property
    def tool_object(self) -> List[types.Tool]:
        """
        Build one ``mcp.types.Tool`` per registered tool.

        Returns:
            Tool descriptors with name, description and input schema, in registration order.
        """
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.parameters or {"type": "object", "properties": {}},
            )
            for tool in self.tools.values()
        ]
