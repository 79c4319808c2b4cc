"""Tool types shared between the model switcher and its host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolResult:
    tool_call_id: str = ""
    content: str = ""
    is_error: bool = False


@dataclass
class ToolDefinition:
    name: str = ""
    label: str = ""
    description: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)
    execute: Any = None
