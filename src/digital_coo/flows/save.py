"""Save-to-memory flow."""

import logging

from ..intents import IntentFlow
from ..memory import ArchiveError, DocumentSource, MemoryArchive
from .base import Flow, FlowContext, FlowResult

logger = logging.getLogger(__name__)

SAVE_USAGE_MESSAGE = "ℹ️ اكتب المحتوى بعد كلمة حفظ، مثال: حفظ: قرار استراتيجي"
SAVE_FAILED_MESSAGE = "❌ تعذر حفظ الوثيقة في الذاكرة المؤسسية."


def saved_message(document_id: str) -> str:
    return f"✓ تم حفظ الوثيقة بنجاح (ID: {document_id})"


class SaveMemoryFlow(Flow):
    """Store the extracted message content as a classified document."""

    def __init__(self, archive: MemoryArchive) -> None:
        self.archive = archive

    @property
    def intent(self) -> IntentFlow:
        return IntentFlow.SAVE_MEMORY

    async def run(self, ctx: FlowContext) -> FlowResult:
        content = ctx.intent.content
        if not content:
            return FlowResult(reply=SAVE_USAGE_MESSAGE)

        source = DocumentSource(ctx.message.channel.value)
        try:
            document_id = await self.archive.save(content, source, ctx.message.sender_id)
        except ArchiveError as e:
            logger.error(f"Save to memory error: {e}")
            return FlowResult(reply=SAVE_FAILED_MESSAGE)

        return FlowResult(reply=saved_message(document_id), metadata={"document_id": document_id})
