"""Activity records: models, validation and construction."""

from .factory import create_record, parse_kind, restore_record
from .models import (
    KIND_REGISTRY,
    ActivityKind,
    Cycling,
    Record,
    Running,
    UsageCounter,
    Walking,
)
from .validation import all_finite, all_positive

__all__ = [
    "KIND_REGISTRY",
    "ActivityKind",
    "Cycling",
    "Record",
    "Running",
    "UsageCounter",
    "Walking",
    "all_finite",
    "all_positive",
    "create_record",
    "parse_kind",
    "restore_record",
]
