"""JSONL logging for observability."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    channel: str | None = None
    sender_id: str | None = None
    flow: str | None = None
    engine: str | None = None
    duration_ms: float | None = None
    document_id: str | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "logs.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".digital-coo" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log(
        self,
        event: str,
        *,
        channel: str | None = None,
        sender_id: str | None = None,
        flow: str | None = None,
        engine: str | None = None,
        duration_ms: float | None = None,
        document_id: str | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            channel=channel,
            sender_id=sender_id,
            flow=flow,
            engine=engine,
            duration_ms=duration_ms,
            document_id=document_id,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_inbound(
        self,
        channel: str,
        sender_id: str,
        *,
        message_length: int,
        authorized: bool = True,
    ) -> None:
        """Log an inbound transport event."""
        self.log(
            "message_received",
            channel=channel,
            sender_id=sender_id,
            message_length=message_length,
            authorized=authorized,
        )

    def log_engine(
        self,
        engine: str,
        *,
        channel: str | None = None,
        flow: str | None = None,
        hour: int | None = None,
        peak: bool | None = None,
    ) -> None:
        """Log which engine and flow handled a message."""
        self.log(
            "engine_selected",
            channel=channel,
            flow=flow,
            engine=engine,
            riyadh_hour=hour,
            peak=peak,
        )

    def log_archive(
        self,
        doc_type: str,
        success: bool,
        *,
        document_id: str | None = None,
        error: str | None = None,
    ) -> None:
        """Log the outcome of an archive call."""
        self.log(
            "archive",
            document_id=document_id,
            error=error if not success else None,
            success=success,
            doc_type=doc_type,
        )

    def log_reply(
        self,
        channel: str,
        *,
        flow: str | None = None,
        duration_ms: float | None = None,
        reply_length: int | None = None,
    ) -> None:
        """Log a delivered reply."""
        self.log(
            "reply_sent",
            channel=channel,
            flow=flow,
            duration_ms=duration_ms,
            reply_length=reply_length,
        )

    def log_vendor_error(self, vendor: str, error: str, *, channel: str | None = None) -> None:
        """Log a failed vendor call."""
        self.log("vendor_error", channel=channel, engine=vendor, error=error)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
