from .base import (
    ToolDefinition,
    ToolFailure,
    ToolParameter,
    ToolResult,
    ToolSuccess,
    parse_sections,
)
from .catalog import DEFAULT_FIELDS, DEFAULT_LIMITS, build_tool_catalog
from .registry import ToolRegistry

__all__ = [
    "ToolDefinition",
    "ToolFailure",
    "ToolParameter",
    "ToolResult",
    "ToolSuccess",
    "parse_sections",
    "DEFAULT_FIELDS",
    "DEFAULT_LIMITS",
    "build_tool_catalog",
    "ToolRegistry",
]
