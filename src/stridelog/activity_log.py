"""Activity log: the in-memory owner of all records."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .config import StrideLogConfig
from .errors import RecordNotFound, ValidationError
from .logging import JSONLLogger
from .records import ActivityKind, Record, create_record
from .storage import ActivityCodec, SQLiteStore

INPUT_FIELDS = ("distance", "duration")


class ActivityLog:
    """Orchestrates record creation, lookup, usage tracking and persistence.

    The collection is ordered by creation and only grows through
    log_activity(); initialize() replaces it wholesale from storage and
    clear_all() empties it.
    """

    def __init__(
        self,
        codec: ActivityCodec,
        logger: JSONLLogger | None = None,
    ) -> None:
        """Initialize the log with a codec and optional event logger.

        Args:
            codec: The ActivityCodec for persistence.
            logger: Optional JSONLLogger for lifecycle events.
        """
        self.codec = codec
        self.logger = logger
        self._records: list[Record] = []

    @property
    def records(self) -> tuple[Record, ...]:
        """Snapshot of all records in creation order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(tuple(self._records))

    def initialize(self) -> list[Record]:
        """Replace the collection with what is stored.

        Returns:
            The loaded records (empty if nothing usable is stored).
        """
        self._records = self.codec.load()
        if self.logger:
            self.logger.log_store_loaded(len(self._records))
        return list(self._records)

    def log_activity(
        self,
        kind: ActivityKind | str,
        coordinates: tuple[float, float],
        inputs: Mapping[str, Any],
    ) -> Record:
        """Validate, build, append and persist a new record.

        Args:
            kind: Activity kind.
            coordinates: (latitude, longitude) of the activity.
            inputs: Numeric inputs: distance, duration and the kind's
                extra field (cadence, elevation_gain or step_count).

        Returns:
            The new record, already saved.

        Raises:
            ValidationError: If any input is invalid. The collection is
                left unchanged.
        """
        extra = {k: v for k, v in inputs.items() if k not in INPUT_FIELDS}
        try:
            record = create_record(
                kind,
                coordinates,
                inputs.get("distance"),
                inputs.get("duration"),
                extra,
                taken_ids={r.id for r in self._records},
            )
        except ValidationError as e:
            if self.logger:
                self.logger.log_validation_failed(str(getattr(kind, "value", kind)), e.fields, str(e))
            raise

        self._records.append(record)
        try:
            self.codec.save(self._records)
        except Exception:
            self._records.pop()
            raise

        if self.logger:
            self.logger.log_activity_logged(record)
        return record

    def find_by_id(self, record_id: str) -> Record:
        """Find a record by id.

        Raises:
            RecordNotFound: If no record has this id.
        """
        for record in self._records:
            if record.id == record_id:
                return record
        raise RecordNotFound(record_id)

    def mark_used(self, record_id: str) -> Record:
        """Increment a record's usage counter in place.

        Usage counts are not written through; call save() to persist them.

        Raises:
            RecordNotFound: If no record has this id.
        """
        record = self.find_by_id(record_id)
        record.mark_used()
        return record

    def save(self) -> None:
        """Write the full collection to storage."""
        self.codec.save(self._records)

    def clear_all(self) -> int:
        """Remove every record and delete the stored collection.

        Returns:
            Number of records removed.
        """
        count = len(self._records)
        self._records = []
        self.codec.clear()
        if self.logger:
            self.logger.log_cleared(count)
        return count


def open_activity_log(
    config: StrideLogConfig,
    logger: JSONLLogger | None = None,
) -> tuple[ActivityLog, SQLiteStore]:
    """Build an initialized ActivityLog backed by the configured database.

    Returns:
        The log and its store; the caller closes the store on exit.
    """
    assert config.db_path is not None
    store = SQLiteStore(config.db_path)
    store.init_db()
    activity_log = ActivityLog(ActivityCodec(store, key=config.storage_key), logger=logger)
    activity_log.initialize()
    return activity_log, store
