"""Corporate memory backed by Supermemory."""

from .archive import (
    NO_RESULTS_MESSAGE,
    SEARCH_ERROR_MESSAGE,
    MemoryArchive,
    format_document,
    format_search_results,
)
from .classifier import DocumentClassifier
from .models import (
    DocumentMetadata,
    DocumentSource,
    FinancialReport,
    MeetingNotes,
    MemoryDocument,
    StrategicDecision,
)
from .store import ArchiveError, DocumentNotFoundError, SupermemoryStore

__all__ = [
    "ArchiveError",
    "DocumentClassifier",
    "DocumentMetadata",
    "DocumentNotFoundError",
    "DocumentSource",
    "FinancialReport",
    "MeetingNotes",
    "MemoryArchive",
    "MemoryDocument",
    "NO_RESULTS_MESSAGE",
    "SEARCH_ERROR_MESSAGE",
    "StrategicDecision",
    "SupermemoryStore",
    "format_document",
    "format_search_results",
]
