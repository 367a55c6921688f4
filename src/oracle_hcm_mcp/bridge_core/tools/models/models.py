from typing import Optional, Any, Callable, Dict, Type
from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents one entry of the tool dispatch table.

    Attributes:
        name: The unique, externally visible name of the tool.
        description: What the tool does; shown to the calling agent.
        func: The (async) callable implementing the tool's pipeline.
        parameters: Sanitized JSON schema describing the tool's input.
        args_model: Optional Pydantic model used for validating and coercing arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Dict[str, Any]] = None
    args_model: Optional[Type[BaseModel]] = None
