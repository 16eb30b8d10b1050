"""Web search through the Brave Search API."""

from typing import Any

import httpx

from ..engine import AgenticTool
from .base import Tool, ToolResult

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
MAX_RESULTS = 20


def _clamp(count: int) -> int:
    return min(max(1, count), MAX_RESULTS)


class BraveSearchTool(Tool):
    """Off-peak search tool, paired with Groq."""

    def __init__(
        self,
        api_key: str,
        max_results: int = 10,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Brave search tool.

        Args:
            api_key: Brave subscription token.
            max_results: Default result count, clamped to 1-20.
            client: Optional shared HTTP client.
        """
        if not api_key:
            raise ValueError("BRAVE_API_KEY is required for brave_search")
        self._api_key = api_key
        self._max_results = _clamp(max_results)
        self._client = client or httpx.AsyncClient(timeout=30.0)

    @property
    def name(self) -> str:
        return "brave_search"

    @property
    def agentic(self) -> AgenticTool:
        return AgenticTool.BRAVE

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Market or company query."},
                "max_results": {"type": "integer", "description": "1-20, default 10."},
            },
            "required": ["query"],
        }

    @staticmethod
    def _web_results(data: dict[str, Any]) -> list[dict[str, Any]]:
        return (data.get("web") or {}).get("results") or []

    def _format_results(self, data: dict[str, Any]) -> str:
        """Render Brave hits as numbered markdown sections for the prompt."""
        sections = [
            f"### {i}. {hit.get('title', 'No title')}\n"
            f"URL: {hit.get('url', '')}\n"
            f"{hit.get('description', 'No description')}"
            for i, hit in enumerate(self._web_results(data), 1)
        ]
        return "\n\n".join(sections) or "No results found."

    async def execute(
        self,
        query: str,
        max_results: int | None = None,
        **kwargs: Any,
    ) -> ToolResult:
        query = (query or "").strip()
        if not query:
            return ToolResult.failure("Search query cannot be empty")

        count = _clamp(max_results if max_results is not None else self._max_results)
        try:
            response = await self._client.get(
                BRAVE_SEARCH_URL,
                params={"q": query, "count": count},
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": self._api_key,
                },
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            return ToolResult.failure(f"Search failed: {e}")

        return ToolResult(
            success=True,
            output=self._format_results(data),
            metadata={"query": query, "num_results": len(self._web_results(data))},
        )

    async def aclose(self) -> None:
        await self._client.aclose()
