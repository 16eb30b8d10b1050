"""Keyword-based intent routing.

Rules are checked in order and the first one whose keywords appear in the
message wins. Matching is plain, case-sensitive substring containment, so a
message mentioning both a meeting and an invoice is an invoice.
"""

import re
from dataclasses import dataclass
from enum import Enum


class IntentFlow(Enum):
    """The flows a message can be dispatched to."""

    INVOICE = "invoice"
    MEETING = "meeting"
    MARKET_RESEARCH = "market_research"
    RECRUITING = "recruiting"
    SAVE_MEMORY = "save_memory"
    GENERIC_CHAT = "generic_chat"


@dataclass(frozen=True)
class RoutingRule:
    """A flow and the keywords that select it."""

    flow: IntentFlow
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class RoutedIntent:
    """Result of routing a message."""

    flow: IntentFlow
    content: str


DEFAULT_RULES: tuple[RoutingRule, ...] = (
    RoutingRule(IntentFlow.INVOICE, ("فاتورة", "invoice")),
    RoutingRule(IntentFlow.MEETING, ("اجتماع", "meeting")),
    RoutingRule(IntentFlow.MARKET_RESEARCH, ("ابحث", "سوق")),
    RoutingRule(IntentFlow.RECRUITING, ("مواهب", "recruit")),
    RoutingRule(IntentFlow.SAVE_MEMORY, ("حفظ", "save")),
)

SAVE_TRIGGER_PATTERN = re.compile(r"حفظ|save", re.IGNORECASE)


def extract_save_content(text: str) -> str:
    """Remove save trigger words and the leading colon from a message.

    Every occurrence is removed, including ones inside other words
    ("savings" becomes "ings").
    """
    stripped = SAVE_TRIGGER_PATTERN.sub("", text).strip()
    return stripped.lstrip(":").strip()


class IntentRouter:
    """Classifies message text into an IntentFlow."""

    def __init__(self, rules: tuple[RoutingRule, ...] | None = None) -> None:
        self.rules = rules if rules is not None else DEFAULT_RULES

    def classify(self, text: str) -> IntentFlow:
        for rule in self.rules:
            if rule.matches(text):
                return rule.flow
        return IntentFlow.GENERIC_CHAT

    def route(self, text: str) -> RoutedIntent:
        """Classify ``text`` and extract the content the flow works on."""
        flow = self.classify(text)
        if flow is IntentFlow.SAVE_MEMORY:
            return RoutedIntent(flow=flow, content=extract_save_content(text))
        return RoutedIntent(flow=flow, content=text)


_default_router = IntentRouter()


def route(text: str) -> RoutedIntent:
    """Route ``text`` with the default rule table."""
    return _default_router.route(text)
