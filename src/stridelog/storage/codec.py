"""JSON codec between the activity collection and the key-value store."""

import json
import logging
from collections.abc import Sequence

from ..errors import ValidationError
from ..records import Record, restore_record
from .store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"


class ActivityCodec:
    """Serializes records to one JSON document under a fixed key.

    Stored records carry only a 'kind' tag, so loading dispatches on it to
    rebuild the right variant and recomputes pace, speed and label.
    Corrupt stored data never raises: it loads as an empty collection.
    """

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        """Initialize the codec.

        Args:
            store: Key-value store to read from and write to.
            key: Key holding the serialized collection.
        """
        self.store = store
        self.key = key

    def encode(self, records: Sequence[Record]) -> str:
        """Encode records as a JSON array, preserving order."""
        return json.dumps([record.to_dict() for record in records], ensure_ascii=False)

    def decode(self, text: str) -> list[Record]:
        """Decode a JSON array into records.

        Elements that cannot be rebuilt, and repeats of an id already
        loaded, are skipped with a warning.
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            logger.warning("Invalid JSON under '%s': %s. Starting empty.", self.key, e)
            return []

        if not isinstance(data, list):
            logger.warning("Expected a list under '%s', got %s. Starting empty.", self.key, type(data).__name__)
            return []

        records: list[Record] = []
        seen_ids: set[str] = set()
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Skipping stored activity %d: not an object", index)
                continue
            try:
                record = restore_record(item)
            except ValidationError as e:
                logger.warning("Skipping stored activity %d: %s", index, e)
                continue
            if record.id in seen_ids:
                logger.warning("Skipping stored activity %d: duplicate id %s", index, record.id)
                continue
            seen_ids.add(record.id)
            records.append(record)
        return records

    def save(self, records: Sequence[Record]) -> None:
        """Write the full collection, replacing the stored value.

        The document is encoded before the store is touched, so a failed
        encode leaves the previous value in place.
        """
        payload = self.encode(records)
        self.store.set_item(self.key, payload)

    def load(self) -> list[Record]:
        """Read the stored collection. Returns [] if absent or corrupt."""
        text = self.store.get_item(self.key)
        if text is None:
            return []
        return self.decode(text)

    def clear(self) -> None:
        """Delete the stored collection."""
        self.store.remove_item(self.key)
