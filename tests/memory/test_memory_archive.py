"""Tests for MemoryArchive."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from digital_coo.memory import (
    NO_RESULTS_MESSAGE,
    SEARCH_ERROR_MESSAGE,
    ArchiveError,
    DocumentClassifier,
    DocumentNotFoundError,
    DocumentSource,
    FinancialReport,
    MeetingNotes,
    MemoryArchive,
    StrategicDecision,
    SupermemoryStore,
    format_document,
    format_search_results,
)


@pytest.fixture
def archive(mock_store, json_logger) -> MemoryArchive:
    return MemoryArchive(mock_store, json_logger=json_logger)


def logged_events(json_logger) -> list[dict]:
    with open(json_logger.log_path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


class TestArchive:
    @pytest.mark.asyncio
    async def test_builds_tagged_document(self, archive, mock_store):
        document_id = await archive.archive(
            "Telegram: hello", DocumentSource.TELEGRAM, "42", "telegram_message"
        )

        assert document_id == "doc-1"
        document = mock_store.create_document.call_args.args[0]
        assert document.title.startswith("TELEGRAM_MESSAGE - ")
        assert document.content == "Telegram: hello"
        assert document.source is DocumentSource.TELEGRAM
        assert document.type == "telegram_message"
        assert document.tags == ("xcircle-coo", "telegram", "telegram_message")
        assert document.user_id == "42"
        assert mock_store.create_document.call_args.kwargs.get("workspace", False) is False

    @pytest.mark.asyncio
    async def test_failure_is_swallowed_and_logged(self, archive, mock_store, json_logger):
        mock_store.create_document.side_effect = ArchiveError("503")

        assert await archive.archive("x", DocumentSource.WHATSAPP, "s", "whatsapp_message") is None

        event = logged_events(json_logger)[-1]
        assert event["event"] == "archive"
        assert event["extra"]["success"] is False
        assert "503" in event["error"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_swallowed(self, archive, mock_store):
        mock_store.create_document.side_effect = RuntimeError("socket closed")
        assert await archive.archive("x", DocumentSource.TELEGRAM, None, "telegram_message") is None

    @pytest.mark.asyncio
    async def test_unconfigured_store_skips(self, archive, mock_store):
        mock_store.is_configured = False

        assert await archive.archive("x", DocumentSource.TELEGRAM, "42", "telegram_message") is None
        mock_store.create_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_background_and_drain(self, archive, mock_store):
        archive.archive_in_background("a", DocumentSource.TELEGRAM, "42", "telegram_message")
        archive.archive_in_background("b", DocumentSource.TELEGRAM, "42", "telegram_response")
        assert archive.pending == 2

        await archive.drain()

        assert archive.pending == 0
        assert mock_store.create_document.await_count == 2

    @pytest.mark.asyncio
    async def test_drain_survives_failures(self, archive, mock_store):
        mock_store.create_document.side_effect = RuntimeError("down")
        archive.archive_in_background("a", DocumentSource.TELEGRAM, "42", "telegram_message")

        await archive.drain()

        assert archive.pending == 0


class TestSave:
    @pytest.mark.asyncio
    async def test_save_classifies_into_workspace(self, mock_store, json_logger):
        llm = MagicMock()
        llm.complete = AsyncMock(
            return_value='{"title": "Hiring plan", "summary": "Two engineers", '
            '"tags": ["hiring"], "type": "decision"}'
        )
        archive = MemoryArchive(mock_store, DocumentClassifier(llm), json_logger)

        document_id = await archive.save("Hire two engineers", DocumentSource.TELEGRAM, "42")

        assert document_id == "doc-1"
        document = mock_store.create_document.call_args.args[0]
        assert mock_store.create_document.call_args.kwargs["workspace"] is True
        assert document.title == "Hiring plan"
        assert document.summary == "Two engineers"
        assert document.tags == ("hiring",)
        assert document.type == "decision"
        assert document.source is DocumentSource.TELEGRAM

    @pytest.mark.asyncio
    async def test_save_without_classifier_uses_fallback(self, archive, mock_store):
        await archive.save("Short note")

        document = mock_store.create_document.call_args.args[0]
        assert document.title == "Untitled Document"
        assert document.source is DocumentSource.MANUAL

    @pytest.mark.asyncio
    async def test_save_propagates_store_errors(self, archive, mock_store):
        mock_store.create_document.side_effect = ArchiveError("401")
        with pytest.raises(ArchiveError):
            await archive.save("note")

    @pytest.mark.asyncio
    async def test_financial_report(self, archive, mock_store):
        await archive.save_financial_report(
            FinancialReport(period="Q3 2024", revenue=100.0, expenses=60.0, profit=40.0)
        )

        document = mock_store.create_document.call_args.args[0]
        assert document.source is DocumentSource.FINANCIAL_REPORT
        assert "Period: Q3 2024" in document.content
        assert "Profit: SAR 40.0" in document.content

    @pytest.mark.asyncio
    async def test_meeting_notes(self, archive, mock_store):
        await archive.save_meeting_notes(
            MeetingNotes(date="2024-06-01", topic="Budget", attendees=["Sara", "Omar"])
        )

        document = mock_store.create_document.call_args.args[0]
        assert document.source is DocumentSource.MEETING_NOTES
        assert "Attendees: Sara, Omar" in document.content

    @pytest.mark.asyncio
    async def test_strategic_decision(self, archive, mock_store):
        await archive.save_strategic_decision(
            StrategicDecision(date="2024-06-01", decision="Enter UAE", owner="Sara")
        )

        document = mock_store.create_document.call_args.args[0]
        assert document.source is DocumentSource.STRATEGIC_DECISION
        assert "Owner: Sara" in document.content


class TestReads:
    @pytest.mark.asyncio
    async def test_search_no_results(self, archive):
        assert await archive.search("nothing") == NO_RESULTS_MESSAGE

    @pytest.mark.asyncio
    async def test_search_renders_hits(self, archive, mock_store):
        mock_store.search.return_value = [
            {
                "title": "Q3 report",
                "summary": "Revenue up",
                "tags": ["finance", "q3"],
                "timestamp": "2024-06-01T10:00:00Z",
            }
        ]

        reply = await archive.search("revenue")

        assert reply.startswith("📚 Found 1 documents:")
        assert "**Q3 report**" in reply
        assert "finance, q3" in reply
        assert "2024-06-01" in reply

    @pytest.mark.asyncio
    async def test_search_error(self, archive, mock_store):
        mock_store.search.side_effect = ArchiveError("timeout")
        assert await archive.search("x") == SEARCH_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_recall(self, archive, mock_store):
        mock_store.get_document.return_value = {
            "title": "Plan",
            "content": "Body text",
            "tags": ["plan"],
            "type": "decision",
            "timestamp": "2024-06-01T10:30:00+00:00",
        }

        reply = await archive.recall("d1")

        assert reply == format_document(mock_store.get_document.return_value)
        assert "Body text" in reply
        assert "2024-06-01 10:30" in reply

    @pytest.mark.asyncio
    async def test_recall_missing(self, archive, mock_store):
        mock_store.get_document.side_effect = DocumentNotFoundError("nope")
        with pytest.raises(DocumentNotFoundError):
            await archive.recall("nope")

    @pytest.mark.asyncio
    async def test_recall_store_error_is_not_found(self, archive, mock_store):
        mock_store.get_document.side_effect = ArchiveError("500")
        with pytest.raises(DocumentNotFoundError):
            await archive.recall("d1")

    @pytest.mark.asyncio
    async def test_knowledge_base_summary(self, archive, mock_store):
        mock_store.list_documents.return_value = [
            {"type": "meeting_notes"},
            {"type": "meeting_notes"},
            {"type": "decision"},
            {},
        ]

        summary = await archive.knowledge_base_summary()

        assert "Total Documents: 4" in summary
        assert "**MEETING NOTES**: 2 documents" in summary
        assert "**DECISION**: 1 documents" in summary
        assert "**DOCUMENT**: 1 documents" in summary

    @pytest.mark.asyncio
    async def test_search_with_unparsable_store_response(self, json_logger):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, text="<html>bad gateway</html>")
            )
        )
        store = SupermemoryStore("sm-key", base_url="https://memory.test/v1", client=client)
        archive = MemoryArchive(store, json_logger=json_logger)

        assert await archive.search("revenue") == SEARCH_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_stats(self, archive, mock_store):
        mock_store.stats.return_value = {"total_documents": 3}
        assert await archive.stats() == {"total_documents": 3}

    @pytest.mark.asyncio
    async def test_stats_error_is_none(self, archive, mock_store):
        mock_store.stats.side_effect = ArchiveError("503")
        assert await archive.stats() is None


class TestFormatting:
    def test_document_with_null_fields(self):
        reply = format_document(
            {"title": None, "content": None, "tags": None, "type": None, "timestamp": None}
        )

        assert "**Untitled Document**" in reply
        assert "📅 Created: -" in reply
        assert "🏷️ Tags: " in reply
        assert "📌 Type: document" in reply

    def test_search_hit_with_null_fields(self):
        reply = format_search_results([{"title": None, "summary": None, "tags": "finance"}])

        assert "1. **Untitled Document**" in reply
        assert "None" not in reply

    @pytest.mark.asyncio
    async def test_recall_null_content(self, archive, mock_store):
        mock_store.get_document.return_value = {"title": "Plan", "content": None}
        reply = await archive.recall("d1")
        assert reply.startswith("📄 **Plan**")
