"""Transport-neutral message types."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Channel(Enum):
    """Transports the bot listens on."""

    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"

    @property
    def label(self) -> str:
        return "Telegram" if self is Channel.TELEGRAM else "WhatsApp"


@dataclass(frozen=True)
class InboundMessage:
    """One text message received on a channel."""

    text: str
    channel: Channel
    sender_id: str
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
