"""Corporate memory: archival, explicit saves, search and recall."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import datetime
from typing import Any

from ..logging import JSONLLogger, get_logger
from .classifier import DocumentClassifier
from .models import (
    DocumentSource,
    FinancialReport,
    MeetingNotes,
    MemoryDocument,
    StrategicDecision,
    utc_timestamp,
)
from .store import ArchiveError, DocumentNotFoundError, SupermemoryStore

logger = logging.getLogger(__name__)

ARCHIVE_TAG = "xcircle-coo"
NO_RESULTS_MESSAGE = "❌ No documents found matching your query."
SEARCH_ERROR_MESSAGE = "❌ Error searching memory. Please try again."
SUMMARY_ERROR_MESSAGE = "❌ Error generating summary."


def _format_date(timestamp: Any, with_time: bool = False) -> str:
    if not timestamp:
        return "-"
    try:
        parsed = datetime.fromisoformat(str(timestamp).replace("Z", "+00:00"))
    except ValueError:
        return str(timestamp)
    return parsed.strftime("%Y-%m-%d %H:%M" if with_time else "%Y-%m-%d")


def _format_tags(doc: dict[str, Any]) -> str:
    tags = doc.get("tags")
    if not isinstance(tags, list):
        return ""
    return ", ".join(str(tag) for tag in tags)


def format_search_results(results: list[dict[str, Any]]) -> str:
    """Render search hits for a chat reply. Null fields render as blanks."""
    if not results:
        return NO_RESULTS_MESSAGE

    lines = [f"📚 Found {len(results)} documents:", ""]
    for i, doc in enumerate(results, 1):
        lines.append(f"{i}. **{doc.get('title') or 'Untitled Document'}**")
        lines.append(f"   📌 {doc.get('summary') or ''}")
        lines.append(f"   🏷️ Tags: {_format_tags(doc)}")
        lines.append(f"   📅 {_format_date(doc.get('timestamp'))}")
        lines.append("")

    return "\n".join(lines).rstrip()


def format_document(doc: dict[str, Any]) -> str:
    """Render a full document for a chat reply."""
    return "\n".join([
        f"📄 **{doc.get('title') or 'Untitled Document'}**",
        "",
        str(doc.get("content") or ""),
        "",
        "---",
        f"📅 Created: {_format_date(doc.get('timestamp'), with_time=True)}",
        f"🏷️ Tags: {_format_tags(doc)}",
        f"📌 Type: {doc.get('type') or 'document'}",
    ])


class MemoryArchive:
    """Appends documents to the memory store and reads them back.

    ``archive`` is best-effort: failures are logged and swallowed so a chat
    reply never depends on it. ``save`` is an explicit user action and
    raises ArchiveError when the store fails.
    """

    def __init__(
        self,
        store: SupermemoryStore,
        classifier: DocumentClassifier | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.store = store
        self.classifier = classifier or DocumentClassifier(None)
        self.json_logger = json_logger or get_logger()
        self._pending: set[asyncio.Task] = set()

    async def archive(
        self,
        content: str,
        source: DocumentSource,
        user_id: str | None,
        doc_type: str,
    ) -> str | None:
        """Archive one chat event. Returns the document id, or None on failure."""
        if not self.store.is_configured:
            return None

        timestamp = utc_timestamp()
        document = MemoryDocument(
            title=f"{doc_type.upper()} - {timestamp}",
            content=content,
            source=source,
            type=doc_type,
            tags=(ARCHIVE_TAG, source.value, doc_type),
            user_id=user_id,
            timestamp=timestamp,
        )

        try:
            document_id = await self.store.create_document(document)
        except Exception as e:
            logger.error(f"Supermemory save error: {e}")
            self.json_logger.log_archive(doc_type, False, error=str(e))
            return None

        logger.info(f"Saved to Supermemory: {document_id}")
        self.json_logger.log_archive(doc_type, True, document_id=document_id)
        return document_id

    def archive_in_background(
        self,
        content: str,
        source: DocumentSource,
        user_id: str | None,
        doc_type: str,
    ) -> asyncio.Task:
        """Schedule ``archive`` without waiting for it."""
        task = asyncio.create_task(self.archive(content, source, user_id, doc_type))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled archive call to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def save(
        self,
        content: str,
        source: DocumentSource = DocumentSource.MANUAL,
        user_id: str | None = None,
    ) -> str:
        """Classify and save a document to the workspace.

        Raises:
            ArchiveError: If the store is not configured or rejects the document.
        """
        metadata = await self.classifier.classify(content)
        document = MemoryDocument(
            title=metadata.title,
            content=content,
            summary=metadata.summary,
            tags=metadata.tags,
            source=source,
            type=metadata.type,
            user_id=user_id,
        )

        document_id = await self.store.create_document(document, workspace=True)
        logger.info(f"Document saved to Supermemory: {document_id}")
        self.json_logger.log_archive(metadata.type, True, document_id=document_id)
        return document_id

    async def search(self, query: str) -> str:
        """Search the workspace and render the hits for chat."""
        try:
            results = await self.store.search(query)
        except ArchiveError as e:
            logger.error(f"Search memory error: {e}")
            return SEARCH_ERROR_MESSAGE
        return format_search_results(results)

    async def recall(self, document_id: str) -> str:
        """Render a full document.

        Raises:
            DocumentNotFoundError: If the document cannot be retrieved.
        """
        try:
            doc = await self.store.get_document(document_id)
        except DocumentNotFoundError:
            raise
        except ArchiveError as e:
            logger.error(f"Retrieve document error: {e}")
            raise DocumentNotFoundError(document_id) from e
        return format_document(doc)

    async def save_financial_report(self, report: FinancialReport) -> str:
        content = f"""Financial Report
================
Period: {report.period}
Revenue: SAR {report.revenue}
Expenses: SAR {report.expenses}
Profit: SAR {report.profit}

Details:
{report.details}"""
        return await self.save(content, DocumentSource.FINANCIAL_REPORT)

    async def save_meeting_notes(self, notes: MeetingNotes) -> str:
        content = f"""Meeting Notes
=============
Date: {notes.date}
Attendees: {', '.join(notes.attendees)}
Topic: {notes.topic}

Agenda:
{notes.agenda}

Decisions:
{notes.decisions}

Action Items:
{notes.action_items}

Next Steps:
{notes.next_steps}"""
        return await self.save(content, DocumentSource.MEETING_NOTES)

    async def save_strategic_decision(self, decision: StrategicDecision) -> str:
        content = f"""Strategic Decision
==================
Date: {decision.date}
Decision: {decision.decision}

Rationale:
{decision.rationale}

Expected Impact:
{decision.expected_impact}

Implementation Timeline:
{decision.timeline}

Owner: {decision.owner}"""
        return await self.save(content, DocumentSource.STRATEGIC_DECISION)

    async def stats(self) -> dict[str, Any] | None:
        try:
            return await self.store.stats()
        except ArchiveError as e:
            logger.error(f"Get memory stats error: {e}")
            return None

    async def knowledge_base_summary(self) -> str:
        """Count workspace documents by type."""
        try:
            documents = await self.store.list_documents()
        except ArchiveError as e:
            logger.error(f"Generate knowledge base summary error: {e}")
            return SUMMARY_ERROR_MESSAGE

        by_type = Counter(str(doc.get("type") or "document") for doc in documents)

        lines = ["📚 **Corporate Knowledge Base Summary**", "", f"Total Documents: {len(documents)}", ""]
        for doc_type, count in by_type.items():
            lines.append(f"**{doc_type.replace('_', ' ').upper()}**: {count} documents")

        return "\n".join(lines).rstrip()
