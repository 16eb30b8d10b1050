"""WhatsApp channel adapter.

WhatsApp Web runs in a separate bridge process that owns the browser
session: it shows the pairing QR code, persists the session to disk and
queues incoming messages. This adapter polls that bridge over HTTP.

Bridge endpoints:
    GET  /status                   -> {"ready": bool}
    GET  /messages                 -> {"messages": [{"id", "from", "body"}]}
    POST /messages/{id}/reply      <- {"text": str}
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import Settings
from ..logging import JSONLLogger, get_logger
from ..models import Channel, InboundMessage
from .pipeline import ChatPipeline

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "❌ حدث خطأ في معالجة الرسالة. يرجى المحاولة لاحقاً."
MEMORY_COMMANDS = ("/save", "/search", "/recall")


@dataclass(frozen=True)
class WhatsAppMessage:
    """A message as delivered by the bridge."""

    id: str
    sender: str
    body: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WhatsAppMessage":
        return cls(
            id=str(data["id"]),
            sender=str(data.get("from", "")),
            body=str(data.get("body") or ""),
        )


class WhatsAppBridge:
    """HTTP client for the local WhatsApp Web bridge."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def is_ready(self) -> bool:
        try:
            response = await self._client.get(f"{self.base_url}/status")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"WhatsApp bridge unreachable: {e}")
            return False
        except ValueError as e:
            logger.warning(f"WhatsApp bridge returned invalid status: {e}")
            return False
        return isinstance(data, dict) and bool(data.get("ready"))

    async def fetch_messages(self) -> list[WhatsAppMessage]:
        """Take the messages queued since the last call.

        Raises httpx.HTTPError when the bridge is unreachable and ValueError
        when the body is not a message list. Malformed items are dropped.
        """
        response = await self._client.get(f"{self.base_url}/messages")
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        items = data.get("messages") or []
        if not isinstance(items, list):
            raise ValueError(f"expected a message list, got {type(items).__name__}")

        messages = []
        for item in items:
            try:
                messages.append(WhatsAppMessage.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed WhatsApp message {item!r}: {e}")
        return messages

    async def reply(self, message_id: str, text: str) -> None:
        response = await self._client.post(
            f"{self.base_url}/messages/{message_id}/reply",
            json={"text": text},
        )
        response.raise_for_status()

    async def close(self) -> None:
        await self._client.aclose()


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


class WhatsAppBot:
    """WhatsApp adapter: founder-only, silent towards everyone else."""

    def __init__(
        self,
        settings: Settings,
        pipeline: ChatPipeline,
        bridge: WhatsAppBridge | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.settings = settings
        self.pipeline = pipeline
        self.bridge = bridge or WhatsAppBridge(settings.whatsapp_bridge_url)
        self.json_logger = json_logger or get_logger()
        self._stop = asyncio.Event()
        self._ready = False

    def is_authorized(self, sender: str) -> bool:
        """The founder's number must appear in the sender id. Unset allows all."""
        founder = _digits(self.settings.founder_whatsapp_number)
        return not founder or founder in sender

    async def _memory_command(self, text: str, message: InboundMessage) -> str:
        command, _, argument = text.partition(" ")
        argument = argument.strip()

        if command == "/save":
            if not argument:
                return "Usage: /save <content>"
            return await self.pipeline.save_command(argument, message)
        if command == "/search":
            if not argument:
                return "Usage: /search <query>"
            return await self.pipeline.search_command(argument)
        if not argument:
            return "Usage: /recall <document_id>"
        return await self.pipeline.recall_command(argument.split()[0])

    async def handle_message(self, incoming: WhatsAppMessage) -> str | None:
        """Build the reply for one bridge message, or None to stay silent."""
        if not self.is_authorized(incoming.sender):
            self.json_logger.log_inbound(
                Channel.WHATSAPP.value,
                incoming.sender,
                message_length=len(incoming.body),
                authorized=False,
            )
            return None

        text = incoming.body
        message = InboundMessage(text=text, channel=Channel.WHATSAPP, sender_id=incoming.sender)
        self.json_logger.log_inbound(Channel.WHATSAPP.value, incoming.sender, message_length=len(text))

        try:
            if text.split(" ", 1)[0] in MEMORY_COMMANDS:
                return await self._memory_command(text, message)
            return await self.pipeline.handle(message)
        except Exception as e:
            logger.exception("WhatsApp message handling error")
            self.json_logger.log("whatsapp_error", channel=Channel.WHATSAPP.value, error=str(e))
            return ERROR_MESSAGE

    async def process(self, incoming: WhatsAppMessage) -> None:
        """Handle one message and send the reply back through the bridge."""
        reply = await self.handle_message(incoming)
        if reply is None:
            return
        try:
            await self.bridge.reply(incoming.id, reply)
        except httpx.HTTPError as e:
            logger.error(f"WhatsApp reply failed: {e}")

    async def poll_once(self) -> int:
        """Fetch and process queued messages one at a time. Returns the count."""
        try:
            messages = await self.bridge.fetch_messages()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"WhatsApp poll failed: {e}")
            return 0

        for incoming in messages:
            await self.process(incoming)
        return len(messages)

    async def run(self) -> None:
        """Poll the bridge until ``stop`` is called."""
        logger.info("Starting WhatsApp adapter...")
        while not self._stop.is_set():
            ready = await self.bridge.is_ready()
            if ready and not self._ready:
                logger.info("WhatsApp client is ready!")
            elif not ready and self._ready:
                logger.warning("WhatsApp disconnected")
            self._ready = ready

            if ready:
                await self.poll_once()

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.settings.whatsapp_poll_interval)
            except asyncio.TimeoutError:
                pass

    async def stop(self) -> None:
        """Stop accepting messages and close the bridge client."""
        self._stop.set()
        await self.bridge.close()
