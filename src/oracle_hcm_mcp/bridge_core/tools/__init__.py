from .models import ToolDefinition, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry
from .dispatch import ToolDispatcher
from .schema import SchemaValidator

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
]
