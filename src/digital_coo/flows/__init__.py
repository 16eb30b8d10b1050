"""Intent flows: what happens after a message is classified."""

from .base import Flow, FlowContext, FlowResult
from .chat import ChatFlow, EmailedChatFlow, InvoiceFlow, MeetingFlow
from .registry import FlowRegistry, build_default_flows
from .research import MarketResearchFlow, RecruitingFlow, format_ranking, parse_ranking
from .save import SAVE_FAILED_MESSAGE, SAVE_USAGE_MESSAGE, SaveMemoryFlow, saved_message

__all__ = [
    "ChatFlow",
    "Flow",
    "FlowContext",
    "FlowRegistry",
    "FlowResult",
    "EmailedChatFlow",
    "InvoiceFlow",
    "MeetingFlow",
    "MarketResearchFlow",
    "RecruitingFlow",
    "SAVE_FAILED_MESSAGE",
    "SAVE_USAGE_MESSAGE",
    "SaveMemoryFlow",
    "build_default_flows",
    "format_ranking",
    "parse_ranking",
    "saved_message",
]
