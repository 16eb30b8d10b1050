"""Search tools keyed by the engine pairing they serve."""

import logging
from typing import Any

from ..engine import AgenticTool
from .base import Tool, ToolResult

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Holds at most one search tool per ``AgenticTool``."""

    def __init__(self) -> None:
        self._tools: dict[AgenticTool, Tool] = {}

    def register(self, tool: Tool) -> None:
        if tool.agentic in self._tools:
            raise ValueError(f"Tool for {tool.agentic.value} already registered")
        self._tools[tool.agentic] = tool

    def get(self, agentic: AgenticTool) -> Tool | None:
        return self._tools.get(agentic)

    def list_tools(self) -> list[str]:
        return [tool.name for tool in self._tools.values()]

    def has_agentic(self, agentic: AgenticTool) -> bool:
        return agentic in self._tools

    async def dispatch_agentic(self, agentic: AgenticTool, args: dict[str, Any]) -> ToolResult:
        """Run the search tool paired with the selected engine.

        Never raises: an unconfigured tool, bad arguments and tool
        exceptions all come back as a failed ToolResult.
        """
        tool = self._tools.get(agentic)
        if tool is None:
            return ToolResult.failure(f"No search tool configured for {agentic.value}")

        error = tool.validate_args(args)
        if error:
            return ToolResult.failure(error)

        try:
            return await tool.execute(**args)
        except Exception as e:
            logger.error(f"{tool.name} failed: {e}")
            return ToolResult.failure(f"Tool execution failed: {e}")

    async def aclose(self) -> None:
        for tool in self._tools.values():
            await tool.aclose()
