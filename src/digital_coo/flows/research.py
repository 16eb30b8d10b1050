"""Flows that consult the agentic search tool before answering."""

import json
import logging
import re
from typing import Any

from ..config import Settings
from ..intents import IntentFlow
from ..llm import Engines, build_system_prompt, format_search_context
from ..tools import ToolRegistry
from .base import Flow, FlowContext, FlowResult

logger = logging.getLogger(__name__)

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

RANKING_PROMPT = """Rank the candidates in the search results below for this request:
{request}

{results}

For each candidate, provide: name, rank (1-10), match_score (0-100),
strengths, gaps, recommendation (Highly Recommended / Recommended / Consider / Not Suitable).

Return as JSON array."""


class MarketResearchFlow(Flow):
    """Search with the agentic tool, then let the engine summarise."""

    def __init__(self, engines: Engines, tools: ToolRegistry, settings: Settings) -> None:
        self.engines = engines
        self.tools = tools
        self.settings = settings

    @property
    def intent(self) -> IntentFlow:
        return IntentFlow.MARKET_RESEARCH

    async def run(self, ctx: FlowContext) -> FlowResult:
        query = ctx.intent.content
        prompt = query
        metadata: dict[str, Any] = {"agentic_tool": ctx.engine.agentic_tool.value}

        result = await self.tools.dispatch_agentic(ctx.engine.agentic_tool, {"query": query})
        if result.success:
            prompt = f"{format_search_context(query, result.output)}\n\n{query}"
            metadata["searched"] = True
        else:
            logger.warning(f"Market search unavailable: {result.error}")
            metadata["searched"] = False

        system = build_system_prompt(
            self.settings.company_name,
            self.settings.founder_name,
            self.intent.value,
        )
        reply = await self.engines.complete(prompt, ctx.engine, system=system)
        return FlowResult(reply=reply, metadata=metadata)


def parse_ranking(response: str) -> list[dict[str, Any]] | None:
    """Extract the ranked candidate list from an LLM response."""
    match = JSON_ARRAY_PATTERN.search(response or "")
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    if not isinstance(data, list):
        return None
    return [item for item in data if isinstance(item, dict)]


def format_ranking(candidates: list[dict[str, Any]]) -> str:
    lines = ["👥 المرشحون حسب الأولوية:", ""]
    for i, candidate in enumerate(candidates, 1):
        name = candidate.get("name", f"Candidate {i}")
        score = candidate.get("match_score", "?")
        recommendation = candidate.get("recommendation", "")
        lines.append(f"{i}. {name} - {score}% - {recommendation}".rstrip(" -"))
        strengths = candidate.get("strengths")
        if strengths:
            if isinstance(strengths, list):
                strengths = ", ".join(str(s) for s in strengths)
            lines.append(f"   ✅ {strengths}")
    return "\n".join(lines)


class RecruitingFlow(Flow):
    """Find candidates with the agentic tool and rank them with the engine."""

    def __init__(self, engines: Engines, tools: ToolRegistry, settings: Settings) -> None:
        self.engines = engines
        self.tools = tools
        self.settings = settings

    @property
    def intent(self) -> IntentFlow:
        return IntentFlow.RECRUITING

    async def run(self, ctx: FlowContext) -> FlowResult:
        request = ctx.intent.content
        system = build_system_prompt(
            self.settings.company_name,
            self.settings.founder_name,
            self.intent.value,
        )

        search = await self.tools.dispatch_agentic(
            ctx.engine.agentic_tool,
            {"query": request, "source": "linkedin"},
        )
        if not search.success:
            logger.warning(f"Candidate search unavailable: {search.error}")
            reply = await self.engines.complete(request, ctx.engine, system=system)
            return FlowResult(reply=reply, metadata={"ranked": False})

        response = await self.engines.complete(
            RANKING_PROMPT.format(request=request, results=search.output),
            ctx.engine,
            system=system,
        )
        ranking = parse_ranking(response)
        if not ranking:
            logger.warning("Candidate ranking was not valid JSON, returning raw results")
            return FlowResult(
                reply=f"👥 نتائج البحث عن المرشحين:\n\n{search.output}",
                metadata={"ranked": False},
            )

        return FlowResult(reply=format_ranking(ranking), metadata={"ranked": True})
