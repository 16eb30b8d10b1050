"""Telegram channel adapter."""

import logging
from collections.abc import Awaitable

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..config import Settings
from ..logging import JSONLLogger, get_logger
from ..models import Channel, InboundMessage
from .pipeline import ChatPipeline, format_engine_status

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "⚠️ عذراً، هذا البوت مخصص للاستخدام الداخلي فقط."
ERROR_MESSAGE = "❌ حدث خطأ في معالجة طلبك."

MEMORY_HELP = """💾 Memory Module Active

Available commands:
/save - Save to memory
/search - Search memory
/recall - Recall information
/kb - Knowledge base summary
/stats - Memory statistics
/engine - Current engine"""

MAX_MESSAGE_LENGTH = 4096


def welcome_message(company: str, founder: str) -> str:
    return (
        f"مرحباً بك في {company} Digital COO. أنا مساعدك التنفيذي الذكي. "
        f"كيف يمكنني مساعدتك اليوم يا أستاذ {founder}؟"
    )


def truncate_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """Truncate message to fit Telegram limits."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 20] + "\n... [مقتطع]"


class TelegramBot:
    """Telegram adapter: access check, then hand the text to the pipeline."""

    def __init__(
        self,
        settings: Settings,
        pipeline: ChatPipeline,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        if not settings.telegram_token_valid:
            raise ValueError("TELEGRAM_BOT_TOKEN is missing or invalid")

        self.token: str = settings.telegram_token  # type: ignore[assignment]
        self.settings = settings
        self.pipeline = pipeline
        self.json_logger = json_logger or get_logger()
        self._app: Application | None = None

    def is_authorized(self, user_id: int) -> bool:
        """Only the configured user may talk to the bot. 0 disables the check."""
        allowed = self.settings.allowed_telegram_user_id
        return not allowed or user_id == allowed

    def _sender_id(self, update: Update) -> int:
        assert update.effective_user is not None
        return update.effective_user.id

    async def _reject_if_unauthorized(self, update: Update) -> bool:
        """Reply with the denial and return True for unknown senders."""
        assert update.message is not None
        user_id = self._sender_id(update)
        if self.is_authorized(user_id):
            return False

        self.json_logger.log_inbound(
            Channel.TELEGRAM.value,
            str(user_id),
            message_length=len(update.message.text or ""),
            authorized=False,
        )
        await update.message.reply_text(UNAUTHORIZED_MESSAGE)
        return True

    async def _reply_from(self, update: Update, command: str, pending: Awaitable[str]) -> None:
        """Await a command reply; any failure becomes the generic error reply."""
        assert update.message is not None
        try:
            reply = await pending
        except Exception as e:
            logger.exception(f"Telegram /{command} failed")
            self.json_logger.log(
                "telegram_error", channel=Channel.TELEGRAM.value, command=command, error=str(e)
            )
            reply = ERROR_MESSAGE
        await update.message.reply_text(truncate_message(reply))

    def _inbound(self, update: Update, text: str) -> InboundMessage:
        return InboundMessage(
            text=text,
            channel=Channel.TELEGRAM,
            sender_id=str(self._sender_id(update)),
        )

    async def _handle_start(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start command."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return
        await update.message.reply_text(
            welcome_message(self.settings.company_name, self.settings.founder_name)
        )

    async def _handle_memory(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /memory command."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return
        await update.message.reply_text(MEMORY_HELP)

    async def _handle_save(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /save <content>."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return

        content = " ".join(context.args or [])
        if not content:
            await update.message.reply_text("Usage: /save <content>")
            return

        await self._reply_from(
            update, "save", self.pipeline.save_command(content, self._inbound(update, content))
        )

    async def _handle_search(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /search <query>."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return

        query = " ".join(context.args or [])
        if not query:
            await update.message.reply_text("Usage: /search <query>")
            return

        await self._reply_from(update, "search", self.pipeline.search_command(query))

    async def _handle_recall(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /recall <document_id>."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return

        if not context.args:
            await update.message.reply_text("Usage: /recall <document_id>")
            return

        await self._reply_from(update, "recall", self.pipeline.recall_command(context.args[0]))

    async def _handle_engine(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /engine command."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return
        await update.message.reply_text(format_engine_status(self.pipeline.current_engine()))

    async def _handle_kb(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /kb command."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return
        await self._reply_from(update, "kb", self.pipeline.knowledge_base_command())

    async def _handle_stats(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /stats command."""
        assert update.message is not None
        if await self._reject_if_unauthorized(update):
            return
        await self._reply_from(update, "stats", self.pipeline.stats_command())

    async def _handle_message(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle incoming text messages."""
        assert update.message is not None
        assert update.message.text is not None

        if await self._reject_if_unauthorized(update):
            return

        message = self._inbound(update, update.message.text)
        self.json_logger.log_inbound(
            Channel.TELEGRAM.value,
            message.sender_id,
            message_length=len(message.text),
        )

        try:
            await update.message.chat.send_action("typing")
            reply = await self.pipeline.handle(message)
            await update.message.reply_text(truncate_message(reply))
        except Exception as e:
            logger.exception("Telegram handling error")
            self.json_logger.log("telegram_error", channel=Channel.TELEGRAM.value, error=str(e))
            await update.message.reply_text(ERROR_MESSAGE)

    async def _post_shutdown(self, application: Application) -> None:
        """Called after Application.shutdown()."""
        await self.pipeline.archive.drain()

    def build_app(self) -> Application:
        """Build the Telegram application."""
        self._app = (
            Application.builder()
            .token(self.token)
            .post_shutdown(self._post_shutdown)
            .build()
        )

        self._app.add_handler(CommandHandler("start", self._handle_start))
        self._app.add_handler(CommandHandler("memory", self._handle_memory))
        self._app.add_handler(CommandHandler("save", self._handle_save))
        self._app.add_handler(CommandHandler("search", self._handle_search))
        self._app.add_handler(CommandHandler("recall", self._handle_recall))
        self._app.add_handler(CommandHandler("engine", self._handle_engine))
        self._app.add_handler(CommandHandler("kb", self._handle_kb))
        self._app.add_handler(CommandHandler("stats", self._handle_stats))
        self._app.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self._handle_message)
        )

        return self._app

    async def start(self) -> None:
        """Start polling without blocking."""
        app = self.build_app()

        logger.info("Starting Telegram bot...")
        await app.initialize()
        await app.start()
        await app.updater.start_polling()  # type: ignore

    async def stop(self) -> None:
        """Stop polling and shut the application down."""
        if self._app:
            await self._app.updater.stop()  # type: ignore
            await self._app.stop()
            await self._app.shutdown()
