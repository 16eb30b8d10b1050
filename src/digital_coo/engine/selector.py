"""Time-of-day engine selection.

The peak window is 20:00-01:00 in Riyadh (fixed UTC+3, no daylight saving).
During it the bot answers with Claude and researches with Z.ai; the rest of
the day it uses Groq and Brave Search.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

RIYADH_UTC_OFFSET_HOURS = 3
PEAK_START_HOUR = 20
PEAK_END_HOUR = 1


class PrimaryEngine(Enum):
    """LLM vendor that answers the message."""

    CLAUDE = "CLAUDE"
    GROQ = "GROQ"


class AgenticTool(Enum):
    """Search service paired with the primary engine."""

    ZAI = "ZAI"
    BRAVE = "BRAVE"


@dataclass(frozen=True)
class EngineDecision:
    """Which engine and agentic tool serve a message."""

    is_peak_time: bool
    primary: PrimaryEngine
    agentic_tool: AgenticTool
    hour_of_day: int

    @property
    def time_window(self) -> str:
        return "PEAK_HOURS" if self.is_peak_time else "OFF_PEAK"


def riyadh_hour(now: datetime) -> int:
    """Hour of day in Riyadh for a timestamp. Naive datetimes are UTC."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return (now.hour + RIYADH_UTC_OFFSET_HOURS) % 24


def is_peak_hour(hour: int) -> bool:
    return hour >= PEAK_START_HOUR or hour < PEAK_END_HOUR


def select_engine(now: datetime | None = None) -> EngineDecision:
    """Pick the engine pair for ``now`` (defaults to the current time)."""
    if now is None:
        now = datetime.now(timezone.utc)

    hour = riyadh_hour(now)
    peak = is_peak_hour(hour)

    return EngineDecision(
        is_peak_time=peak,
        primary=PrimaryEngine.CLAUDE if peak else PrimaryEngine.GROQ,
        agentic_tool=AgenticTool.ZAI if peak else AgenticTool.BRAVE,
        hour_of_day=hour,
    )
