"""Data models for logged activities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

ID_LENGTH = 10


class ActivityKind(str, Enum):
    """Closed set of activity kinds."""

    RUNNING = "running"
    CYCLING = "cycling"
    WALKING = "walking"


def _now() -> datetime:
    return datetime.now().astimezone()


def id_from_time(created_at: datetime) -> str:
    """Derive a record id from its creation time.

    The id is the epoch timestamp in milliseconds, truncated to its last
    ID_LENGTH digits.
    """
    millis = int(created_at.timestamp() * 1000)
    return str(millis)[-ID_LENGTH:]


def make_label(kind: ActivityKind, created_at: datetime) -> str:
    """Build a label like 'Running on March 4'."""
    return f"{kind.value.capitalize()} on {created_at:%B} {created_at.day}"


@dataclass
class UsageCounter:
    """The one mutable piece of an otherwise frozen record."""

    count: int = 0

    def increment(self) -> int:
        self.count += 1
        return self.count


@dataclass(frozen=True, kw_only=True)
class Record(ABC):
    """A single logged activity.

    Records are frozen once built. The derived metric and the label are
    computed in __post_init__ from the immutable inputs; only the usage
    counter changes afterwards.

    Attributes:
        coordinates: (latitude, longitude) where the activity was logged.
        distance: Distance in kilometers.
        duration: Duration in minutes.
        created_at: Timezone-aware creation time.
        id: Identifier derived from created_at when not given.
        usage: Mutable usage counter, see mark_used().
        label: Human-readable label, computed at construction.
    """

    kind: ClassVar[ActivityKind]
    extra_field: ClassVar[str]
    metric_name: ClassVar[str]
    metric_unit: ClassVar[str]

    coordinates: tuple[float, float]
    distance: float
    duration: float
    created_at: datetime = field(default_factory=_now)
    id: str = ""
    usage: UsageCounter = field(default_factory=UsageCounter, hash=False)
    label: str = field(init=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: derived fields go through object.__setattr__
        if not self.id:
            object.__setattr__(self, "id", id_from_time(self.created_at))
        object.__setattr__(self, "coordinates", tuple(self.coordinates))
        object.__setattr__(self, self.metric_name, self.compute_metric())
        object.__setattr__(self, "label", make_label(self.kind, self.created_at))

    @abstractmethod
    def compute_metric(self) -> float:
        """Compute the kind-specific derived metric from the inputs."""
        ...

    @property
    def metric(self) -> float:
        """The derived metric (pace or speed)."""
        return getattr(self, self.metric_name)

    @property
    def extra(self) -> int:
        """The kind-specific extra input field."""
        return getattr(self, self.extra_field)

    @property
    def usage_count(self) -> int:
        return self.usage.count

    def mark_used(self) -> int:
        """Increment the usage counter and return its new value."""
        return self.usage.increment()

    def to_dict(self) -> dict[str, Any]:
        """Flatten to a JSON-compatible dict.

        The derived metric and label are included for readers that want
        them, but restoring a record always recomputes both.
        """
        return {
            "kind": self.kind.value,
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "coordinates": list(self.coordinates),
            "distance": self.distance,
            "duration": self.duration,
            self.extra_field: self.extra,
            "usage_count": self.usage_count,
            "label": self.label,
            self.metric_name: self.metric,
        }


@dataclass(frozen=True, kw_only=True)
class Running(Record):
    """A run. Pace in min/km."""

    kind: ClassVar[ActivityKind] = ActivityKind.RUNNING
    extra_field: ClassVar[str] = "cadence"
    metric_name: ClassVar[str] = "pace"
    metric_unit: ClassVar[str] = "min/km"

    cadence: int
    pace: float = field(init=False)

    def compute_metric(self) -> float:
        return self.duration / self.distance


@dataclass(frozen=True, kw_only=True)
class Cycling(Record):
    """A ride. Speed in km/h."""

    kind: ClassVar[ActivityKind] = ActivityKind.CYCLING
    extra_field: ClassVar[str] = "elevation_gain"
    metric_name: ClassVar[str] = "speed"
    metric_unit: ClassVar[str] = "km/h"

    elevation_gain: int
    speed: float = field(init=False)

    def compute_metric(self) -> float:
        return self.distance / (self.duration / 60)


@dataclass(frozen=True, kw_only=True)
class Walking(Record):
    """A walk. Pace in min/km."""

    kind: ClassVar[ActivityKind] = ActivityKind.WALKING
    extra_field: ClassVar[str] = "step_count"
    metric_name: ClassVar[str] = "pace"
    metric_unit: ClassVar[str] = "min/km"

    step_count: int
    pace: float = field(init=False)

    def compute_metric(self) -> float:
        return self.duration / self.distance


KIND_REGISTRY: dict[ActivityKind, type[Record]] = {
    ActivityKind.RUNNING: Running,
    ActivityKind.CYCLING: Cycling,
    ActivityKind.WALKING: Walking,
}

EXTRA_FIELDS: frozenset[str] = frozenset(cls.extra_field for cls in KIND_REGISTRY.values())
