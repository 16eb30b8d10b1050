"""Shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from digital_coo import logging as coo_logging
from digital_coo.config import Settings
from digital_coo.logging import JSONLLogger


@pytest.fixture(autouse=True)
def json_logger(tmp_path: Path) -> JSONLLogger:
    """Keep structured logs out of the home directory."""
    logger = coo_logging.configure_logger(log_dir=tmp_path / "logs")
    yield logger
    coo_logging._logger = None


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        telegram_token="123456:test-token",
        allowed_telegram_user_id=42,
        founder_whatsapp_number="+966550000000",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def mock_store() -> MagicMock:
    """A configured SupermemoryStore double that accepts every document."""
    store = MagicMock()
    store.is_configured = True
    store.create_document = AsyncMock(return_value="doc-1")
    store.search = AsyncMock(return_value=[])
    store.get_document = AsyncMock()
    store.list_documents = AsyncMock(return_value=[])
    store.stats = AsyncMock(return_value={})
    return store
