"""Persistence for the activity collection."""

from .codec import STORAGE_KEY, ActivityCodec
from .store import KeyValueStore, SQLiteStore

__all__ = ["STORAGE_KEY", "ActivityCodec", "KeyValueStore", "SQLiteStore"]
