"""Configuration loaded from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .storage import STORAGE_KEY

logger = logging.getLogger(__name__)


@dataclass
class StrideLogConfig:
    """Configuration for StrideLog.

    Attributes:
        data_dir: Base directory for local state (~/.stridelog).
        db_path: SQLite database holding the key-value store.
        log_dir: Directory for the JSONL event log.
        storage_key: Key the activity collection is stored under.
        log_max_size_mb: Event log size before rotation.
        telegram_token: Bot token, only needed for the Telegram front end.
    """

    data_dir: Path | None = None
    db_path: Path | None = None
    log_dir: Path | None = None
    storage_key: str = STORAGE_KEY
    log_max_size_mb: float = 10.0
    telegram_token: str | None = None

    def __post_init__(self) -> None:
        if self.data_dir is None:
            self.data_dir = Path.home() / ".stridelog"

        if self.db_path is None:
            self.db_path = self.data_dir / "stridelog.db"

        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"

        if not self.storage_key:
            raise ValueError("storage_key must not be empty")

        if self.log_max_size_mb <= 0:
            raise ValueError("log_max_size_mb must be positive")


def _path_from_env(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value).expanduser() if value else None


def config_from_env() -> StrideLogConfig:
    """Load configuration from environment variables."""
    max_size = os.getenv("STRIDELOG_LOG_MAX_MB", "10")
    try:
        log_max_size_mb = float(max_size)
    except ValueError:
        logger.warning("Invalid STRIDELOG_LOG_MAX_MB=%r, using 10", max_size)
        log_max_size_mb = 10.0

    return StrideLogConfig(
        data_dir=_path_from_env("STRIDELOG_HOME"),
        db_path=_path_from_env("STRIDELOG_DB"),
        log_dir=_path_from_env("STRIDELOG_LOG_DIR"),
        storage_key=os.getenv("STRIDELOG_STORAGE_KEY", STORAGE_KEY),
        log_max_size_mb=log_max_size_mb,
        telegram_token=os.getenv("TELEGRAM_TOKEN"),
    )
