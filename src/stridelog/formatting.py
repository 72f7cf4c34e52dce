"""Plain-text rendering of records for the CLI and the bot."""

from collections.abc import Iterable

from .records import ActivityKind, Record

KIND_ICONS: dict[ActivityKind, str] = {
    ActivityKind.RUNNING: "🏃",
    ActivityKind.CYCLING: "🚴",
    ActivityKind.WALKING: "🚶",
}

EXTRA_UNITS: dict[str, str] = {
    "cadence": "spm",
    "elevation_gain": "m",
    "step_count": "steps",
}


def _number(value: float) -> str:
    """Render 5.0 as '5' and 5.25 as '5.25'."""
    return f"{value:g}"


def format_popup(record: Record) -> str:
    """Short marker text, e.g. '🏃 Running on March 4'."""
    return f"{KIND_ICONS[record.kind]} {record.label}"


def format_record(record: Record) -> str:
    """Multi-line entry for a record."""
    lines = [
        format_popup(record),
        f"  {_number(record.distance)} km · ⏱ {_number(record.duration)} min",
        f"  ⚡ {record.metric:.1f} {record.metric_unit} · "
        f"{record.extra} {EXTRA_UNITS[record.extra_field]}",
        f"  id: {record.id}",
    ]
    return "\n".join(lines)


def format_record_list(records: Iterable[Record]) -> str:
    """Render records newest first, the way the activity list shows them."""
    entries = [format_record(record) for record in reversed(list(records))]
    if not entries:
        return "No activities logged yet."
    return "\n\n".join(entries)


def format_coordinates(coordinates: tuple[float, float]) -> str:
    lat, lng = coordinates
    return f"{lat:.5f}, {lng:.5f}"
