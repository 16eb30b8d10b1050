"""Maps each IntentFlow to the flow that handles it."""

from ..config import Settings
from ..intents import IntentFlow
from ..llm import Engines
from ..memory import MemoryArchive
from ..notify import Mailer
from ..tools import ToolRegistry
from .base import Flow, FlowContext, FlowResult
from .chat import ChatFlow, InvoiceFlow, MeetingFlow
from .research import MarketResearchFlow, RecruitingFlow
from .save import SaveMemoryFlow


class FlowRegistry:
    """Registry for intent flows."""

    def __init__(self) -> None:
        self._flows: dict[IntentFlow, Flow] = {}

    def register(self, flow: Flow) -> None:
        if flow.intent in self._flows:
            raise ValueError(f"Flow '{flow.intent.value}' already registered")
        self._flows[flow.intent] = flow

    def get(self, intent: IntentFlow) -> Flow | None:
        return self._flows.get(intent)

    async def run(self, ctx: FlowContext) -> FlowResult:
        """Run the flow for ``ctx.intent``, falling back to generic chat."""
        flow = self._flows.get(ctx.intent.flow) or self._flows.get(IntentFlow.GENERIC_CHAT)
        if flow is None:
            raise LookupError(f"No flow registered for {ctx.intent.flow.value}")
        return await flow.run(ctx)


def build_default_flows(
    engines: Engines,
    tools: ToolRegistry,
    archive: MemoryArchive,
    settings: Settings,
    mailer: Mailer | None = None,
) -> FlowRegistry:
    """Register one flow per IntentFlow."""
    registry = FlowRegistry()
    registry.register(InvoiceFlow(engines, settings, mailer=mailer))
    registry.register(MeetingFlow(engines, settings, mailer=mailer))
    registry.register(MarketResearchFlow(engines, tools, settings))
    registry.register(RecruitingFlow(engines, tools, settings))
    registry.register(SaveMemoryFlow(archive))
    registry.register(ChatFlow(engines, settings, IntentFlow.GENERIC_CHAT))
    return registry
