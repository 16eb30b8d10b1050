"""Tests for Telegram bot."""

from datetime import datetime, timezone
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from digital_coo.channels import TelegramBot
from digital_coo.channels.telegram import (
    ERROR_MESSAGE,
    MAX_MESSAGE_LENGTH,
    MEMORY_HELP,
    UNAUTHORIZED_MESSAGE,
    truncate_message,
    welcome_message,
)
from digital_coo.config import Settings
from digital_coo.engine import select_engine
from digital_coo.models import Channel


def make_update(text: str = "hello", user_id: int = 42) -> MagicMock:
    update = MagicMock()
    update.effective_user.id = user_id
    update.message.text = text
    update.message.reply_text = AsyncMock()
    update.message.chat.send_action = AsyncMock()
    return update


def make_context(*args: str) -> MagicMock:
    context = MagicMock()
    context.args = list(args)
    return context


def replied(update: MagicMock) -> str:
    return update.message.reply_text.call_args.args[0]


@pytest.fixture
def pipeline() -> MagicMock:
    pipeline = MagicMock()
    pipeline.handle = AsyncMock(return_value="رد")
    pipeline.save_command = AsyncMock(return_value="saved")
    pipeline.search_command = AsyncMock(return_value="found")
    pipeline.recall_command = AsyncMock(return_value="document")
    pipeline.knowledge_base_command = AsyncMock(return_value="summary")
    pipeline.stats_command = AsyncMock(return_value="stats")
    pipeline.current_engine = MagicMock(
        return_value=select_engine(datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc))
    )
    pipeline.archive.drain = AsyncMock()
    return pipeline


@pytest.fixture
def bot(settings, pipeline, json_logger) -> TelegramBot:
    return TelegramBot(settings, pipeline, json_logger=json_logger)


class TestTruncateMessage:
    def test_short_message_unchanged(self):
        assert truncate_message("Short message") == "Short message"

    def test_long_message_truncated(self):
        result = truncate_message("x" * 5000)
        assert len(result) <= MAX_MESSAGE_LENGTH
        assert "مقتطع" in result

    def test_exact_length_unchanged(self):
        text = "x" * MAX_MESSAGE_LENGTH
        assert truncate_message(text) == text


class TestConstruction:
    def test_requires_valid_token(self, pipeline):
        with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
            TelegramBot(Settings(telegram_token="no-colon"), pipeline)

    def test_authorization(self, bot):
        assert bot.is_authorized(42) is True
        assert bot.is_authorized(7) is False

    def test_zero_disables_check(self, pipeline):
        bot = TelegramBot(Settings(telegram_token="1:x", allowed_telegram_user_id=0), pipeline)
        assert bot.is_authorized(7) is True

    def test_build_app_registers_handlers(self, bot):
        app = bot.build_app()
        handlers = app.handlers[0]
        commands = {
            command
            for handler in handlers
            for command in getattr(handler, "commands", ())
        }
        assert {"start", "memory", "save", "search", "recall", "engine", "kb", "stats"} <= commands


class TestMessages:
    @pytest.mark.asyncio
    async def test_authorized_message(self, bot, pipeline):
        update = make_update("invoice for ACME")

        await bot._handle_message(update, make_context())

        update.message.chat.send_action.assert_awaited_once_with("typing")
        message = pipeline.handle.call_args.args[0]
        assert message.text == "invoice for ACME"
        assert message.channel is Channel.TELEGRAM
        assert message.sender_id == "42"
        assert replied(update) == "رد"

    @pytest.mark.asyncio
    async def test_unauthorized_message(self, bot, pipeline):
        update = make_update("invoice", user_id=7)

        await bot._handle_message(update, make_context())

        assert replied(update) == UNAUTHORIZED_MESSAGE
        pipeline.handle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pipeline_error(self, bot, pipeline):
        pipeline.handle.side_effect = RuntimeError("boom")
        update = make_update()

        await bot._handle_message(update, make_context())

        assert replied(update) == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_long_reply_truncated(self, bot, pipeline):
        pipeline.handle.return_value = "x" * 6000
        update = make_update()

        await bot._handle_message(update, make_context())

        assert len(replied(update)) <= MAX_MESSAGE_LENGTH


class TestCommands:
    @pytest.mark.asyncio
    async def test_start(self, bot, settings):
        update = make_update("/start")
        await bot._handle_start(update, make_context())
        assert replied(update) == welcome_message(settings.company_name, settings.founder_name)

    @pytest.mark.asyncio
    async def test_start_unauthorized(self, bot):
        update = make_update("/start", user_id=7)
        await bot._handle_start(update, make_context())
        assert replied(update) == UNAUTHORIZED_MESSAGE

    @pytest.mark.asyncio
    async def test_memory_help(self, bot):
        update = make_update("/memory")
        await bot._handle_memory(update, make_context())
        assert replied(update) == MEMORY_HELP

    @pytest.mark.asyncio
    async def test_save(self, bot, pipeline):
        update = make_update("/save board approved")

        await bot._handle_save(update, make_context("board", "approved"))

        content, message = pipeline.save_command.call_args.args
        assert content == "board approved"
        assert message.channel is Channel.TELEGRAM
        assert replied(update) == "saved"

    @pytest.mark.asyncio
    async def test_save_usage(self, bot, pipeline):
        update = make_update("/save")
        await bot._handle_save(update, make_context())
        assert replied(update).startswith("Usage")
        pipeline.save_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_unauthorized(self, bot, pipeline):
        update = make_update("/save x", user_id=7)
        await bot._handle_save(update, make_context("x"))
        pipeline.save_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search(self, bot, pipeline):
        update = make_update("/search revenue q3")
        await bot._handle_search(update, make_context("revenue", "q3"))
        pipeline.search_command.assert_awaited_once_with("revenue q3")
        assert replied(update) == "found"

    @pytest.mark.asyncio
    async def test_recall(self, bot, pipeline):
        update = make_update("/recall doc-1")
        await bot._handle_recall(update, make_context("doc-1"))
        pipeline.recall_command.assert_awaited_once_with("doc-1")

    @pytest.mark.asyncio
    async def test_recall_usage(self, bot, pipeline):
        update = make_update("/recall")
        await bot._handle_recall(update, make_context())
        assert replied(update).startswith("Usage")

    @pytest.mark.asyncio
    async def test_engine(self, bot):
        update = make_update("/engine")
        await bot._handle_engine(update, make_context())
        assert "GROQ" in replied(update)
        assert "BRAVE" in replied(update)

    @pytest.mark.asyncio
    async def test_kb(self, bot):
        update = make_update("/kb")
        await bot._handle_kb(update, make_context())
        assert replied(update) == "summary"

    @pytest.mark.asyncio
    async def test_post_shutdown_drains_archive(self, bot, pipeline):
        await bot._post_shutdown(MagicMock())
        pipeline.archive.drain.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stats(self, bot, pipeline):
        update = make_update("/stats")
        await bot._handle_stats(update, make_context())
        pipeline.stats_command.assert_awaited_once()
        assert replied(update) == "stats"

    @pytest.mark.asyncio
    async def test_stats_unauthorized(self, bot, pipeline):
        update = make_update("/stats", user_id=7)
        await bot._handle_stats(update, make_context())
        pipeline.stats_command.assert_not_awaited()
        assert replied(update) == UNAUTHORIZED_MESSAGE

    def test_memory_help_lists_stats(self):
        assert "/stats" in MEMORY_HELP

    def test_has_no_blocking_run(self, bot):
        assert not hasattr(bot, "run")


class TestCommandErrors:
    @pytest.mark.parametrize(
        ("command", "pipeline_method", "args"),
        [
            ("save", "save_command", ("note",)),
            ("search", "search_command", ("revenue",)),
            ("recall", "recall_command", ("doc-1",)),
            ("kb", "knowledge_base_command", ()),
            ("stats", "stats_command", ()),
        ],
    )
    @pytest.mark.asyncio
    async def test_failure_replies_with_error(
        self, bot, pipeline, json_logger, command, pipeline_method, args
    ):
        getattr(pipeline, pipeline_method).side_effect = TypeError("can only concatenate str")
        update = make_update(f"/{command}")

        await getattr(bot, f"_handle_{command}")(update, make_context(*args))

        assert replied(update) == ERROR_MESSAGE
        with open(json_logger.log_path, encoding="utf-8") as f:
            errors = [entry for entry in map(json.loads, f) if entry["event"] == "telegram_error"]
        assert errors[-1]["extra"]["command"] == command
        assert errors[-1]["channel"] == Channel.TELEGRAM.value
