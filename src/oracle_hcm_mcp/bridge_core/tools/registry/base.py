"""Tool registry: the dispatch table of externally visible operations."""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, cast

import jsonref  # type: ignore
from pydantic import create_model

from ..models import ToolDefinition
from ..schema import SchemaValidator, ToolParameterFactory
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    A central registry of the tools the bridge exposes.

    Each entry maps a tool name to its implementation together with the
    pydantic model used to validate arguments and the JSON schema advertised
    to callers. Protocol-specific subclasses decide how the table is rendered
    for their runtime via ``tool_object``.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self, func: Callable, name: Optional[str] = None, description: Optional[str] = None) -> ToolDefinition:
        """
        Register an async callable as a tool.

        The definition is generated from the callable's signature and docstring.

        Args:
            func: The coroutine function implementing the tool.
            name: Optional name override; defaults to ``func.__name__``.
            description: Optional description override; defaults to the docstring.

        Returns:
            The registered ToolDefinition.

        Raises:
            ToolRegistrationError: If the name is already taken.
            ToolValidationError: If ``func`` is not async, or lacks a docstring or parameter descriptions.
        """
        tool = self._generate_tool_definition(func, name=name, description=description)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info("Registered tool: '%s'", tool.name)
        return tool

    def tool(self, func: Callable) -> Callable:
        """Decorator registering a function as a tool.

        Args:
            func: The function to register.

        Returns:
            The original function.
        """
        self.register(func)
        return func

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a registered tool.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in registry.") from None

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """The tool table rendered for a specific protocol runtime."""
        pass

    def _generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable.

        Args:
            func: The function to describe.
            name: Optional name override.
            description: Optional description override; defaults to the docstring.

        Returns:
            A ToolDefinition with an args model and a resolved, sanitized schema.

        Raises:
            ToolValidationError: If the function is not async, or is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if not inspect.iscoroutinefunction(func):
            msg = f"Tool '{tool_name}' must be an async function."
            logger.error(msg)
            raise ToolValidationError(msg)
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        fields: Dict[str, Any] = {}
        for param_name, param in inspect.signature(func).parameters.items():
            if param_name == "self":
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)

        args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = args_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False yields plain dicts instead of JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=SchemaValidator.sanitize_schema(resolved),
            args_model=args_model,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. Callers need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc
