"""The per-message sequence shared by every channel adapter."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..engine import EngineDecision, select_engine
from ..flows import FlowContext, FlowRegistry, saved_message
from ..intents import IntentRouter
from ..logging import JSONLLogger, get_logger
from ..memory import ArchiveError, DocumentNotFoundError, DocumentSource, MemoryArchive
from ..models import InboundMessage

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND_MESSAGE = "❌ Document not found."
SAVE_COMMAND_MESSAGE = "✓ Document saved to corporate memory"
SAVE_COMMAND_FAILED = "❌ Could not save the document. Please try again."
STATS_ERROR_MESSAGE = "❌ Could not load memory statistics."


def format_engine_status(decision: EngineDecision) -> str:
    return (
        f"🕒 Riyadh hour: {decision.hour_of_day:02d}:00 ({decision.time_window})\n"
        f"🧠 Primary engine: {decision.primary.value}\n"
        f"🔎 Agentic tool: {decision.agentic_tool.value}"
    )


def format_stats(stats: dict[str, Any]) -> str:
    """Render the workspace stats object as one `key: value` line per field."""
    lines = ["📊 Memory statistics"]
    for key, value in stats.items():
        label = str(key).replace("_", " ")
        lines.append(f"• {label}: {value}")
    return "\n".join(lines)

class ChatPipeline:
    """Archive, route, answer and archive again.

    Both archive calls are detached tasks: their failure is logged by the
    archive and never reaches the reply.
    """

    def __init__(
        self,
        router: IntentRouter,
        flows: FlowRegistry,
        archive: MemoryArchive,
        json_logger: JSONLLogger | None = None,
        engine_selector: Callable[[datetime | None], EngineDecision] = select_engine,
    ) -> None:
        self.router = router
        self.flows = flows
        self.archive = archive
        self.json_logger = json_logger or get_logger()
        self.engine_selector = engine_selector

    def current_engine(self) -> EngineDecision:
        return self.engine_selector(None)

    async def handle(self, message: InboundMessage) -> str:
        """Produce the reply for one authorized message."""
        start_time = time.time()
        channel = message.channel.value
        source = DocumentSource(channel)

        self.archive.archive_in_background(
            f"{message.channel.label}: {message.text}",
            source,
            message.sender_id,
            f"{channel}_message",
        )

        intent = self.router.route(message.text)
        decision = self.current_engine()
        self.json_logger.log_engine(
            decision.primary.value,
            channel=channel,
            flow=intent.flow.value,
            hour=decision.hour_of_day,
            peak=decision.is_peak_time,
        )

        result = await self.flows.run(FlowContext(intent=intent, message=message, engine=decision))

        self.archive.archive_in_background(
            f"Response: {result.reply}",
            source,
            message.sender_id,
            f"{channel}_response",
        )

        self.json_logger.log_reply(
            channel,
            flow=intent.flow.value,
            duration_ms=(time.time() - start_time) * 1000,
            reply_length=len(result.reply),
        )
        return result.reply

    async def save_command(self, content: str, message: InboundMessage) -> str:
        try:
            document_id = await self.archive.save(
                content,
                DocumentSource(message.channel.value),
                message.sender_id,
            )
        except ArchiveError as e:
            logger.error(f"Save command failed: {e}")
            return SAVE_COMMAND_FAILED
        return f"{SAVE_COMMAND_MESSAGE}\n{saved_message(document_id)}"

    async def search_command(self, query: str) -> str:
        return await self.archive.search(query)

    async def recall_command(self, document_id: str) -> str:
        try:
            return await self.archive.recall(document_id)
        except DocumentNotFoundError:
            return DOCUMENT_NOT_FOUND_MESSAGE

    async def knowledge_base_command(self) -> str:
        return await self.archive.knowledge_base_summary()

    async def stats_command(self) -> str:
        stats = await self.archive.stats()
        if stats is None:
            return STATS_ERROR_MESSAGE
        return format_stats(stats)
