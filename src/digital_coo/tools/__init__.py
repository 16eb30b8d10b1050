"""Agentic search tools and their registry."""

from .base import Tool, ToolResult
from .brave_search import BraveSearchTool
from .registry import ToolRegistry
from .zai_search import ZaiSearchTool

__all__ = [
    "BraveSearchTool",
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "ZaiSearchTool",
]
