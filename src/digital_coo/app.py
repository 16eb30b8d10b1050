"""Wiring: build every component once from Settings."""

import asyncio
import logging
import signal
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from .channels import ChatPipeline, TelegramBot, WhatsAppBot
from .config import Settings
from .flows import build_default_flows
from .intents import IntentRouter
from .llm import Engines
from .logging import JSONLLogger
from .memory import DocumentClassifier, MemoryArchive, SupermemoryStore
from .notify import Mailer
from .tools import BraveSearchTool, ToolRegistry, ZaiSearchTool

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Long-lived objects shared by the channel adapters."""

    settings: Settings
    engines: Engines
    tools: ToolRegistry
    store: SupermemoryStore
    archive: MemoryArchive
    pipeline: ChatPipeline

    async def aclose(self) -> None:
        """Finish pending archive calls and close HTTP clients."""
        await self.archive.drain()
        await self.tools.aclose()
        await self.store.close()


def build_tools(settings: Settings) -> ToolRegistry:
    registry = ToolRegistry()
    if settings.brave_api_key:
        registry.register(BraveSearchTool(settings.brave_api_key))
    else:
        logger.warning("BRAVE_API_KEY is missing. Brave Search will be disabled.")
    if settings.zai_api_key:
        registry.register(ZaiSearchTool(settings.zai_api_key))
    else:
        logger.warning("ZAI_API_KEY is missing. Z.ai search will be disabled.")
    return registry


def build_services(settings: Settings, json_logger: JSONLLogger | None = None) -> Services:
    engines = Engines.from_settings(settings, json_logger=json_logger)
    tools = build_tools(settings)

    store = SupermemoryStore(settings.supermemory_api_key, settings.supermemory_workspace_id)
    if not store.is_configured:
        logger.warning("SUPERMEMORY_API_KEY is missing. Archival will be disabled.")
    archive = MemoryArchive(
        store,
        classifier=DocumentClassifier(engines.classifier),
        json_logger=json_logger,
    )

    flows = build_default_flows(
        engines,
        tools,
        archive,
        settings,
        mailer=Mailer.from_settings(settings),
    )
    pipeline = ChatPipeline(IntentRouter(), flows, archive, json_logger=json_logger)

    return Services(
        settings=settings,
        engines=engines,
        tools=tools,
        store=store,
        archive=archive,
        pipeline=pipeline,
    )


async def _shutdown_step(name: str, step: Awaitable[Any]) -> None:
    try:
        await step
    except Exception:
        logger.exception(f"{name} failed during shutdown")


async def run_channels(
    services: Services,
    telegram: bool = True,
    whatsapp: bool = True,
    stop_event: asyncio.Event | None = None,
) -> None:
    """Run the selected adapters until SIGINT/SIGTERM (or ``stop_event``).

    Every adapter is stopped and the services are closed even when one
    adapter crashed or fails to stop.
    """
    stop_event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()
    signals = (signal.SIGINT, signal.SIGTERM)
    for sig in signals:
        loop.add_signal_handler(sig, stop_event.set)

    telegram_bot: TelegramBot | None = None
    whatsapp_bot: WhatsAppBot | None = None
    whatsapp_task: asyncio.Task | None = None

    try:
        if telegram:
            telegram_bot = TelegramBot(services.settings, services.pipeline)
            await telegram_bot.start()
            logger.info("Telegram bot launched!")

        if whatsapp:
            whatsapp_bot = WhatsAppBot(services.settings, services.pipeline)
            whatsapp_task = asyncio.create_task(whatsapp_bot.run())

        await stop_event.wait()
        logger.info("Shutdown signal received")
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)
        try:
            if whatsapp_bot is not None:
                await _shutdown_step("WhatsApp adapter", whatsapp_bot.stop())
            if whatsapp_task is not None:
                await _shutdown_step("WhatsApp polling", whatsapp_task)
            if telegram_bot is not None:
                await _shutdown_step("Telegram bot", telegram_bot.stop())
        finally:
            await services.aclose()
