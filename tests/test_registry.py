import json
from typing import Annotated, Any, List, Optional

import pytest
from mcp import types
from pydantic import BaseModel, Field

from oracle_hcm_mcp.bridge_core.exceptions import (
    InvalidParamsError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolValidationError,
)
from oracle_hcm_mcp.bridge_core.tools import ToolDefinition, ToolRegistry
from oracle_hcm_mcp.mcp_wrapper import McpToolRegistry


# Concrete registry for exercising the base class; named to avoid PytestCollectionWarning
class ConcreteTestRegistry(ToolRegistry):
    @property
    def tool_object(self) -> Any:
        return None


@pytest.mark.asyncio
async def test_registry_tool_decorator() -> None:
    registry = ConcreteTestRegistry()

    @registry.tool
    async def my_tool(x: Annotated[int, Field(description="An integer")]) -> int:
        """My tool description."""
        return x * 2

    assert "my_tool" in registry.tools
    tool_def = registry.tools["my_tool"]
    assert tool_def.description == "My tool description."
    assert await tool_def.func(2) == 4
    assert tool_def.args_model is not None


def test_register_returns_definition_and_rejects_duplicates() -> None:
    registry = ConcreteTestRegistry()

    async def lookup(code: Annotated[str, Field(description="Code")]) -> str:
        """Look something up."""
        return code

    tool_def = registry.register(lookup)
    assert isinstance(tool_def, ToolDefinition)
    assert tool_def.name == "lookup"

    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register(lookup)


def test_register_with_name_and_description_override() -> None:
    registry = ConcreteTestRegistry()

    async def lookup(code: Annotated[str, Field(description="Code")]) -> str:
        """Look something up."""
        return code

    tool_def = registry.register(lookup, name="find_code", description="Find a code.")

    assert registry.get("find_code") is tool_def
    assert tool_def.description == "Find a code."


def test_register_rejects_sync_function() -> None:
    registry = ConcreteTestRegistry()

    def blocking(code: Annotated[str, Field(description="Code")]) -> str:
        """Blocking lookup."""
        return code

    with pytest.raises(ToolValidationError, match="must be an async function"):
        registry.register(blocking)

    assert registry.tools == {}


def test_get_unknown_tool_is_invalid_params() -> None:
    registry = ConcreteTestRegistry()

    with pytest.raises(ToolNotFoundError, match="Tool 'nope' not found in registry.") as exc_info:
        registry.get("nope")

    assert isinstance(exc_info.value, InvalidParamsError)


def test_registry_missing_docstring() -> None:
    registry = ConcreteTestRegistry()
    with pytest.raises(ToolValidationError, match="missing docstring"):

        @registry.tool
        async def no_doc_tool(x: Annotated[int, Field(description="desc")]) -> None:
            pass


def test_registry_missing_param_description() -> None:
    registry = ConcreteTestRegistry()
    with pytest.raises(ToolValidationError, match="missing a description"):

        @registry.tool
        async def bad_param_tool(x: int) -> None:
            """Docstring."""
            pass


def test_nested_pydantic_models_schema_resolution() -> None:
    """Nested models are inlined so the advertised input schema has no $ref."""
    registry = ConcreteTestRegistry()

    class Address(BaseModel):
        street: str = Field(description="Street name")
        city: str = Field(description="City name")

    class User(BaseModel):
        name: str = Field(description="User's full name")
        address: Address = Field(description="User's address")
        tags: List[str] = Field(description="User tags")

    @registry.tool
    async def create_user(user: Annotated[User, Field(description="The user object to create")]) -> str:
        """Creates a new user in the system."""
        return f"Created user {user.name}"

    schema = registry.tools["create_user"].parameters

    assert schema is not None
    user_schema = schema["properties"]["user"]
    assert user_schema["type"] == "object"
    assert user_schema["properties"]["address"]["type"] == "object"
    assert "street" in user_schema["properties"]["address"]["properties"]
    assert "$defs" not in schema
    assert "$ref" not in json.dumps(schema)


def test_recursive_model_detection() -> None:
    registry = ConcreteTestRegistry()

    class Node(BaseModel):
        name: str = Field(description="Node name")
        child: Optional["Node"] = Field(default=None, description="Child node")

    Node.model_rebuild()

    with pytest.raises(ToolValidationError, match="Recursive structure detected"):

        @registry.tool
        async def process_tree(root: Annotated[Node, Field(description="Root node")]) -> str:
            """Process a tree structure."""
            return "processed"


def test_tool_without_parameters() -> None:
    registry = ConcreteTestRegistry()

    @registry.tool
    async def get_current_time() -> str:
        """Returns the current server time."""
        return "12:00 PM"

    schema = registry.tools["get_current_time"].parameters
    assert schema is not None
    assert schema["type"] == "object"
    assert schema["properties"] == {}


def test_mcp_registry_tool_object() -> None:
    registry = McpToolRegistry()

    @registry.tool
    async def lookup(
        code: Annotated[str, Field(description="Lookup code")],
        as_of: Annotated[Optional[str], Field(description="As-of date")] = None,
    ) -> dict:
        """Look up a code."""
        return {"code": code}

    tool_obj = registry.tool_object

    assert isinstance(tool_obj, list)
    assert len(tool_obj) == 1
    tool = tool_obj[0]
    assert isinstance(tool, types.Tool)
    assert tool.name == "lookup"
    assert tool.description == "Look up a code."
    assert tool.inputSchema["type"] == "object"
    assert tool.inputSchema["required"] == ["code"]
    assert tool.inputSchema["additionalProperties"] is False
    assert tool.inputSchema["properties"]["code"] == {"type": "string", "description": "Lookup code"}
    assert tool.inputSchema["properties"]["as_of"]["type"] == ["string", "null"]
