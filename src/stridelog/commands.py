"""Coercion of raw text arguments into activity inputs.

Both front ends accept commands like ``/run 5.2 24 178``. Text that is
not a number becomes NaN so that validation rejects it, rather than
failing here with a parse error.
"""

from collections.abc import Sequence
from typing import Any

from .errors import ValidationError
from .records import KIND_REGISTRY, ActivityKind

KIND_ALIASES: dict[str, ActivityKind] = {
    "run": ActivityKind.RUNNING,
    "running": ActivityKind.RUNNING,
    "cycle": ActivityKind.CYCLING,
    "ride": ActivityKind.CYCLING,
    "cycling": ActivityKind.CYCLING,
    "walk": ActivityKind.WALKING,
    "walking": ActivityKind.WALKING,
}

USAGE = {
    ActivityKind.RUNNING: "/run DISTANCE_KM DURATION_MIN CADENCE",
    ActivityKind.CYCLING: "/cycle DISTANCE_KM DURATION_MIN ELEVATION_GAIN_M",
    ActivityKind.WALKING: "/walk DISTANCE_KM DURATION_MIN STEPS",
}


def kind_from_command(text: str) -> ActivityKind | None:
    """Resolve a command word like 'run' or '/ride' to a kind."""
    return KIND_ALIASES.get(text.strip().lstrip("/").lower())


def coerce_number(text: str) -> float:
    """Convert text to float; anything unparseable becomes NaN."""
    try:
        return float(text.strip().replace(",", "."))
    except (AttributeError, ValueError):
        return float("nan")


def parse_coordinates(args: Sequence[str]) -> tuple[float, float]:
    """Parse 'LAT LNG' (or 'LAT,LNG') into a coordinate pair.

    Raises:
        ValidationError: If there are not exactly two values.
    """
    parts = [p for arg in args for p in arg.replace(",", " ").split()]
    if len(parts) != 2:
        raise ValidationError(("coordinates",), "Usage: /at LATITUDE LONGITUDE")
    return coerce_number(parts[0]), coerce_number(parts[1])


def parse_activity_args(kind: ActivityKind, args: Sequence[str]) -> dict[str, Any]:
    """Map positional 'DISTANCE DURATION EXTRA' text to numeric inputs.

    Raises:
        ValidationError: If the argument count is wrong.
    """
    if len(args) != 3:
        raise ValidationError(("arguments",), f"Usage: {USAGE[kind]}")
    distance, duration, extra = (coerce_number(a) for a in args)
    return {
        "distance": distance,
        "duration": duration,
        KIND_REGISTRY[kind].extra_field: extra,
    }
