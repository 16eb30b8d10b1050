"""Base interfaces for intent flows.

A flow is what runs after a message has been classified: it calls one or
more vendors and produces the reply text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..engine import EngineDecision
from ..intents import IntentFlow, RoutedIntent
from ..models import InboundMessage


@dataclass(frozen=True)
class FlowContext:
    """Everything a flow needs to handle one message."""

    intent: RoutedIntent
    message: InboundMessage
    engine: EngineDecision


@dataclass
class FlowResult:
    """Outcome of a flow."""

    reply: str
    metadata: dict[str, Any] = field(default_factory=dict)


class Flow(ABC):
    """Abstract base class for intent flows."""

    @property
    @abstractmethod
    def intent(self) -> IntentFlow:
        """The IntentFlow this flow handles."""
        ...

    @abstractmethod
    async def run(self, ctx: FlowContext) -> FlowResult:
        """Handle one routed message."""
        ...
