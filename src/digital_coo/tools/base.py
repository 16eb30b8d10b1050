"""Agentic search tool interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..engine import AgenticTool


@dataclass
class ToolResult:
    """Outcome of one search call."""

    success: bool
    output: str
    error: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, output="", error=error)


class Tool(ABC):
    """A search service an engine consults before answering.

    Each tool is paired with exactly one ``AgenticTool`` value, so the
    registry can look it up from the current ``EngineDecision``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def agentic(self) -> AgenticTool:
        """The engine pairing this tool serves."""
        ...

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """JSON Schema for the search arguments."""
        ...

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult:
        ...

    async def aclose(self) -> None:
        """Release any network resources held by the tool."""

    def validate_args(self, args: dict[str, Any]) -> str | None:
        """Return an error message, or None when ``args`` fit the schema."""
        properties = self.parameters.get("properties", {})

        missing = [name for name in self.parameters.get("required", []) if name not in args]
        if missing:
            return f"Missing required argument: {missing[0]}"

        expected = {"string": str, "integer": int}
        for key, value in args.items():
            python_type = expected.get(properties.get(key, {}).get("type"))
            if python_type and not isinstance(value, python_type):
                return f"Argument '{key}' must be a {properties[key]['type']}"

        return None
