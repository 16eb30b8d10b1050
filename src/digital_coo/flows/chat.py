"""Flows answered directly by the primary engine."""

import logging

from ..config import Settings
from ..intents import IntentFlow
from ..llm import Engines, build_system_prompt
from ..notify import Mailer
from .base import Flow, FlowContext, FlowResult

logger = logging.getLogger(__name__)


class ChatFlow(Flow):
    """Send the message to the selected engine with the executive prompt."""

    def __init__(
        self,
        engines: Engines,
        settings: Settings,
        intent: IntentFlow = IntentFlow.GENERIC_CHAT,
    ) -> None:
        self.engines = engines
        self.settings = settings
        self._intent = intent

    @property
    def intent(self) -> IntentFlow:
        return self._intent

    def system_prompt(self) -> str:
        flow = None if self._intent is IntentFlow.GENERIC_CHAT else self._intent.value
        return build_system_prompt(self.settings.company_name, self.settings.founder_name, flow)

    async def run(self, ctx: FlowContext) -> FlowResult:
        reply = await self.engines.complete(
            ctx.intent.content,
            ctx.engine,
            system=self.system_prompt(),
        )
        return FlowResult(reply=reply)


class EmailedChatFlow(ChatFlow):
    """A chat flow whose draft is also sent by e-mail, best effort.

    Subclasses name the recipient and subject. A missing mailer or recipient
    skips the e-mail; a failed send is logged and the reply is unaffected.
    """

    def __init__(
        self,
        engines: Engines,
        settings: Settings,
        intent: IntentFlow,
        mailer: Mailer | None = None,
    ) -> None:
        super().__init__(engines, settings, intent)
        self.mailer = mailer

    def recipient(self) -> str | None:
        raise NotImplementedError

    def subject(self) -> str:
        raise NotImplementedError

    async def run(self, ctx: FlowContext) -> FlowResult:
        result = await super().run(ctx)

        recipient = self.recipient()
        if self.mailer is None or not recipient:
            return result

        try:
            await self.mailer.send(
                recipient,
                self.subject(),
                f"Request:\n{ctx.intent.content}\n\nDraft:\n{result.reply}",
            )
            result.metadata["emailed_to"] = recipient
        except Exception as e:
            logger.error(f"{self.intent.value} email failed: {e}")

        return result


class InvoiceFlow(EmailedChatFlow):
    """Draft an invoice and copy the draft to accounting."""

    def __init__(
        self,
        engines: Engines,
        settings: Settings,
        mailer: Mailer | None = None,
    ) -> None:
        super().__init__(engines, settings, IntentFlow.INVOICE, mailer)

    def recipient(self) -> str | None:
        return self.settings.accounting_email

    def subject(self) -> str:
        return f"{self.settings.company_name} - Invoice draft"


class MeetingFlow(EmailedChatFlow):
    """Draft a meeting summary and send it as an invite.

    Goes to ``MEETING_INVITE_EMAIL``, or to the founder's own mailbox
    (``EMAIL_USER``) when no invite address is configured.
    """

    def __init__(
        self,
        engines: Engines,
        settings: Settings,
        mailer: Mailer | None = None,
    ) -> None:
        super().__init__(engines, settings, IntentFlow.MEETING, mailer)

    def recipient(self) -> str | None:
        return self.settings.meeting_invite_email or self.settings.email_user

    def subject(self) -> str:
        return f"{self.settings.company_name} - Meeting invite"
