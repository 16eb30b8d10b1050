"""Data models for corporate memory."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class DocumentSource(Enum):
    """Where an archived document came from."""

    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    MANUAL = "manual"
    FINANCIAL_REPORT = "financial_report"
    MEETING_NOTES = "meeting_notes"
    STRATEGIC_DECISION = "strategic_decision"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class MemoryDocument:
    """A document in the external memory store.

    Attributes:
        title: Short title.
        content: Full document body.
        source: Origin of the document.
        type: Document kind, e.g. 'telegram_message' or 'meeting_notes'.
        summary: Optional short summary.
        tags: Ordered tags.
        user_id: Originating user, if any.
        timestamp: ISO-8601 creation time.
        id: Assigned by the store, None before creation.
    """

    title: str
    content: str
    source: DocumentSource
    type: str
    summary: str | None = None
    tags: tuple[str, ...] = ()
    user_id: str | None = None
    timestamp: str = field(default_factory=utc_timestamp)
    id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the store's create endpoint."""
        payload: dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "source": self.source.value,
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "type": self.type,
            "tags": list(self.tags),
        }
        if self.summary is not None:
            payload["summary"] = self.summary
        return payload


@dataclass(frozen=True)
class DocumentMetadata:
    """Title, summary, tags and type derived for a saved document."""

    title: str
    summary: str
    tags: tuple[str, ...]
    type: str

    @classmethod
    def fallback(cls, content: str) -> "DocumentMetadata":
        """Deterministic metadata used when classification fails."""
        return cls(
            title="Untitled Document",
            summary=content[:50],
            tags=("general",),
            type="document",
        )


@dataclass
class FinancialReport:
    period: str
    revenue: float
    expenses: float
    profit: float
    details: str = ""


@dataclass
class MeetingNotes:
    date: str
    topic: str
    attendees: list[str] = field(default_factory=list)
    agenda: str = ""
    decisions: str = ""
    action_items: str = ""
    next_steps: str = ""


@dataclass
class StrategicDecision:
    date: str
    decision: str
    rationale: str = ""
    expected_impact: str = ""
    timeline: str = ""
    owner: str = ""
