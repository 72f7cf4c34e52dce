"""JSONL event log for activity lifecycle events."""

import json
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .records import Record


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    source: str | None = None
    record_id: str | None = None
    kind: str | None = None
    count: int | None = None
    fields: list[str] | None = None
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
        filename: str = "events.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".stridelog" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)
        self._current_source: str | None = None

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def set_source(self, source: str | None) -> None:
        """Set the front end (e.g. 'cli', 'telegram:42') for subsequent logs."""
        self._current_source = source

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
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
        source: str | None = None,
        record_id: str | None = None,
        kind: str | None = None,
        count: int | None = None,
        fields: list[str] | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            source=source or self._current_source,
            record_id=record_id,
            kind=kind,
            count=count,
            fields=fields,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_activity_logged(self, record: "Record") -> None:
        """Log a newly admitted record."""
        self.log(
            "activity_logged",
            record_id=record.id,
            kind=record.kind.value,
            distance=record.distance,
            duration=record.duration,
        )

    def log_validation_failed(
        self,
        kind: str,
        fields: Iterable[str],
        error: str,
    ) -> None:
        """Log rejected activity inputs."""
        self.log("validation_failed", kind=kind, fields=list(fields), error=error)

    def log_store_loaded(self, count: int) -> None:
        """Log the collection being replaced from storage."""
        self.log("store_loaded", count=count)

    def log_cleared(self, count: int) -> None:
        """Log the collection and stored key being cleared."""
        self.log("cleared", count=count)


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
