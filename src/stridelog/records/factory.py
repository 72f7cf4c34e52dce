"""Construction of typed records from raw inputs."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from datetime import datetime
from typing import Any

from ..errors import ValidationError
from .models import (
    EXTRA_FIELDS,
    ID_LENGTH,
    KIND_REGISTRY,
    ActivityKind,
    Record,
    id_from_time,
)
from .validation import all_finite, all_positive, is_whole

# Extra fields that only need to be finite and non-negative
NON_NEGATIVE_FIELDS = frozenset({"elevation_gain"})


def parse_kind(kind: ActivityKind | str) -> ActivityKind:
    """Resolve a kind tag, raising ValidationError if it is not known."""
    try:
        return ActivityKind(kind)
    except ValueError:
        raise ValidationError(("kind",), f"Unknown activity kind: {kind!r}") from None


def _check_coordinates(coordinates: Any) -> tuple[float, float] | None:
    try:
        lat, lng = coordinates
    except (TypeError, ValueError):
        return None
    if not all_finite(lat, lng):
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return float(lat), float(lng)


def _check_extra(name: str, value: Any) -> bool:
    if not all_finite(value) or not is_whole(value):
        return False
    if name in NON_NEGATIVE_FIELDS:
        return value >= 0
    return all_positive(value)


def _unique_id(candidate: str, taken_ids: Collection[str]) -> str:
    """Bump a time-derived id until it is not already taken."""
    modulus = 10**ID_LENGTH
    while candidate in taken_ids:
        candidate = str((int(candidate) + 1) % modulus)
    return candidate


def create_record(
    kind: ActivityKind | str,
    coordinates: Any,
    distance: Any,
    duration: Any,
    extra: Mapping[str, Any],
    *,
    created_at: datetime | None = None,
    record_id: str | None = None,
    taken_ids: Collection[str] = (),
) -> Record:
    """Build a record of the variant named by kind.

    Every field is checked before anything is constructed; all failing
    fields are reported together.

    Args:
        kind: Activity kind tag.
        coordinates: (latitude, longitude) pair.
        distance: Distance in km, must be finite and positive.
        duration: Duration in minutes, must be finite and positive.
        extra: Mapping holding exactly the variant's extra field.
        created_at: Creation time, defaults to now.
        record_id: Id to keep (restoring from storage). Derived from
            created_at when omitted.
        taken_ids: Ids already used in the collection; a derived id is
            bumped until it is free.

    Returns:
        The constructed record with its metric and label computed.

    Raises:
        ValidationError: If any input fails validation.
    """
    activity_kind = parse_kind(kind)
    cls = KIND_REGISTRY[activity_kind]

    failed: list[str] = []

    coords = _check_coordinates(coordinates)
    if coords is None:
        failed.append("coordinates")

    if not (all_finite(distance) and all_positive(distance)):
        failed.append("distance")
    if not (all_finite(duration) and all_positive(duration)):
        failed.append("duration")

    if cls.extra_field not in extra:
        failed.append(cls.extra_field)
    elif not _check_extra(cls.extra_field, extra[cls.extra_field]):
        failed.append(cls.extra_field)

    # A record never carries another variant's field
    failed.extend(
        name for name in sorted(EXTRA_FIELDS) if name != cls.extra_field and name in extra
    )

    if failed:
        raise ValidationError(failed)

    if created_at is None:
        created_at = datetime.now().astimezone()
    if not record_id:
        record_id = _unique_id(id_from_time(created_at), taken_ids)

    return cls(
        coordinates=coords,
        distance=float(distance),
        duration=float(duration),
        created_at=created_at,
        id=record_id,
        **{cls.extra_field: int(extra[cls.extra_field])},
    )


def restore_record(data: Mapping[str, Any]) -> Record:
    """Rebuild a record from a stored flat field-set.

    Dispatches on the stored 'kind' tag. The id, creation time and usage
    count are kept as stored; pace, speed and label are recomputed.

    Raises:
        ValidationError: If the data cannot form a valid record.
    """
    if "kind" not in data:
        raise ValidationError(("kind",), "Stored activity has no kind")
    cls = KIND_REGISTRY[parse_kind(data["kind"])]

    record_id = data.get("id")
    if not isinstance(record_id, str) or not record_id:
        raise ValidationError(("id",), "Stored activity has no id")

    try:
        created_at = datetime.fromisoformat(data["created_at"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(("created_at",), "Stored activity has no valid created_at") from None

    usage_count = data.get("usage_count", 0)
    if not (is_whole(usage_count) and usage_count >= 0):
        raise ValidationError(("usage_count",), "Stored usage count must be a non-negative integer")

    extra = {name: data[name] for name in EXTRA_FIELDS if name in data}
    record = create_record(
        cls.kind,
        data.get("coordinates"),
        data.get("distance"),
        data.get("duration"),
        extra,
        created_at=created_at,
        record_id=record_id,
    )
    # Trusted verbatim: the counter cannot be derived from other fields
    record.usage.count = int(usage_count)
    return record

