"""
Tavily Search tool registry.

Importing this package registers every tool.
"""
from . import search  # noqa: F401  (registers the tools)
from .base import get_all_tools, get_tool
from .normalize import normalize
from .schemas import ToolContext, ToolDefinition, ToolResult, ToolSchema

__all__ = [
    "get_all_tools",
    "get_tool",
    "normalize",
    "ToolContext",
    "ToolDefinition",
    "ToolResult",
    "ToolSchema",
]
