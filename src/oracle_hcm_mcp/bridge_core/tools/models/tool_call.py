"""Data models for tool dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation as received from the protocol runtime."""

    name: str
    arguments: Any
    call_id: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """The structured outcome of a successful tool invocation."""

    name: str
    response: Dict[str, Any]
    call_id: Optional[str] = None
