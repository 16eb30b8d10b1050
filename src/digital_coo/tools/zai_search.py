"""Agentic search backed by the Z.ai search API."""

from typing import Any

import httpx

from ..engine import AgenticTool
from .base import Tool, ToolResult

ZAI_SEARCH_URL = "https://api.z.ai/v1/search"


class ZaiSearchTool(Tool):
    """Peak-hours search tool, paired with Claude.

    Accepts an optional ``source`` (e.g. ``"linkedin"``) to restrict the
    search, which the recruiting flow uses for candidate discovery.
    """

    def __init__(
        self,
        api_key: str,
        max_results: int = 10,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("ZAI_API_KEY is required for zai_search")
        self._api_key = api_key
        self._max_results = min(max(1, max_results), 20)
        self._client = client or httpx.AsyncClient(timeout=30.0)

    @property
    def name(self) -> str:
        return "zai_search"

    @property
    def agentic(self) -> AgenticTool:
        return AgenticTool.ZAI

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {"type": "string"},
                "max_results": {"type": "integer"},
                "source": {"type": "string"},
            },
            "required": ["query"],
        }

    def _format_results(self, results: list[dict[str, Any]]) -> str:
        if not results:
            return "No results found."

        blocks = []
        for i, hit in enumerate(results, 1):
            block = [f"### {i}. {hit.get('title') or hit.get('name') or 'No title'}"]
            if hit.get("url"):
                block.append(f"URL: {hit['url']}")
            snippet = hit.get("snippet") or hit.get("content") or hit.get("description")
            if snippet:
                block.append(str(snippet))
            blocks.append("\n".join(block))

        return "\n\n".join(blocks)

    async def execute(
        self,
        query: str,
        max_results: int | None = None,
        source: str | None = None,
        **kwargs: Any,
    ) -> ToolResult:
        query = (query or "").strip()
        if not query:
            return ToolResult.failure("Search query cannot be empty")

        limit = max_results if max_results is not None else self._max_results
        payload: dict[str, Any] = {"query": query, "limit": min(max(1, limit), 20)}
        if source:
            payload["source"] = source

        try:
            response = await self._client.post(
                ZAI_SEARCH_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            results = response.json().get("results") or []
        except httpx.HTTPError as e:
            return ToolResult.failure(f"Search failed: {e}")

        return ToolResult(
            success=True,
            output=self._format_results(results),
            metadata={"query": query, "num_results": len(results), "results": results},
        )

    async def aclose(self) -> None:
        await self._client.aclose()
