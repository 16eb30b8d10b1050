"""Channel adapters and the shared chat pipeline."""

from .pipeline import ChatPipeline, format_engine_status
from .telegram import TelegramBot
from .whatsapp import WhatsAppBot, WhatsAppBridge, WhatsAppMessage

__all__ = [
    "ChatPipeline",
    "TelegramBot",
    "WhatsAppBot",
    "WhatsAppBridge",
    "WhatsAppMessage",
    "format_engine_status",
]
