"""StrideLog: a personal activity logbook."""

from .activity_log import ActivityLog, open_activity_log
from .errors import RecordNotFound, StrideLogError, ValidationError
from .records import ActivityKind, Cycling, Record, Running, Walking
from .storage import ActivityCodec, SQLiteStore

__all__ = [
    "ActivityCodec",
    "ActivityKind",
    "ActivityLog",
    "Cycling",
    "Record",
    "RecordNotFound",
    "Running",
    "SQLiteStore",
    "StrideLogError",
    "ValidationError",
    "Walking",
    "open_activity_log",
]
