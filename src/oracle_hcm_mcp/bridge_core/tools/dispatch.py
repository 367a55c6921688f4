"""Dispatches tool invocations through the registry: validate, run, shape the result."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from ..exceptions import HcmError, InternalError, InvalidParamsError
from ..logger import get_logger
from .models import ToolCallRequest, ToolCallResult
from .registry import ToolRegistry

logger = get_logger(__name__)


class ToolDispatcher:
    """Runs one tool call at a time against a registry.

    Argument normalization and validation happen here, before the tool body
    (and therefore before any network call) runs. Errors from the bridge
    taxonomy propagate unchanged; anything else escaping a tool is wrapped in
    an ``InternalError`` so callers only ever see typed errors. There are no
    retries.
    """

    def __init__(self, *, registry: ToolRegistry) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Tool registry used to resolve tool definitions.
        """
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def call(self, name: str, arguments: Any = None, call_id: Optional[str] = None) -> Dict[str, Any]:
        """Dispatch by name and return only the structured response."""
        result = await self.dispatch(ToolCallRequest(name=name, arguments=arguments, call_id=call_id))
        return result.response

    async def dispatch(self, tool_call: ToolCallRequest) -> ToolCallResult:
        """Handle a single tool call request.

        Args:
            tool_call: The tool call request containing name, ID, and arguments.

        Returns:
            The structured result of the tool.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            InvalidParamsError: If the arguments cannot be parsed or fail validation.
            HcmError: Whatever typed error the tool itself raised.
        """
        logger.debug("Handling tool call: %s (ID: %s)", tool_call.name, tool_call.call_id)

        tool_def = self._registry.get(tool_call.name)
        function_args = self._normalize_function_args(tool_call.name, tool_call.arguments)

        if tool_def.args_model:
            try:
                function_args = tool_def.args_model(**function_args).model_dump()
            except ValidationError as validation_error:
                msg = f"Argument validation failed: {validation_error}"
                logger.warning("Validation error for '%s': %s", tool_call.name, msg)
                raise InvalidParamsError(msg) from validation_error

        logger.info("Executing tool '%s'...", tool_call.name)
        try:
            function_result = await tool_def.func(**function_args)
        except HcmError as e:
            logger.warning("Tool '%s' failed: %s (%s)", tool_call.name, e, e.kind.value)
            raise
        except Exception as e:
            logger.error("Unexpected error in tool '%s': %s", tool_call.name, e, exc_info=True)
            raise InternalError(f"Tool '{tool_call.name}' failed: {e}") from e

        logger.info("Tool '%s' executed successfully.", tool_call.name)
        return ToolCallResult(
            name=tool_call.name,
            response=self._to_response(function_result),
            call_id=tool_call.call_id,
        )

    @staticmethod
    def _normalize_function_args(tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Accepts a dict, a JSON object string, or None.

        Raises:
            InvalidParamsError: If the arguments are not a JSON object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as e:
                raise InvalidParamsError(f"Failed to parse arguments for tool '{tool_name}': {e}") from e
            if parsed is None:
                return {}
            if not isinstance(parsed, dict):
                raise InvalidParamsError(
                    f"Failed to parse arguments for tool '{tool_name}': arguments must decode to a JSON object."
                )
            return parsed

        try:
            return dict(raw_args)
        except (TypeError, ValueError) as e:
            raise InvalidParamsError(f"Failed to parse arguments for tool '{tool_name}': {e}") from e

    @staticmethod
    def _to_response(result: Any) -> Dict[str, Any]:
        if isinstance(result, BaseModel):
            return result.model_dump(mode="json", by_alias=True)
        return dict(result)
