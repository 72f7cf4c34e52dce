"""Tests for record data models."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from stridelog.records import ActivityKind, Cycling, Record, Running, Walking
from stridelog.records.models import KIND_REGISTRY, id_from_time, make_label

MARCH_4 = datetime(2024, 3, 4, 8, 30, tzinfo=timezone.utc)


def make_running(**overrides) -> Running:
    kwargs = dict(coordinates=(19.0, 72.0), distance=5.2, duration=24.0, cadence=178, created_at=MARCH_4)
    kwargs.update(overrides)
    return Running(**kwargs)


class TestRecordIdentity:
    """Tests for id and label derivation."""

    def test_id_from_time_truncates_to_ten_digits(self):
        """The id is the last ten digits of epoch milliseconds."""
        created = datetime(2024, 3, 4, tzinfo=timezone.utc)
        assert id_from_time(created) == "9510400000"

    def test_id_derived_when_not_given(self):
        """A record without an explicit id derives it from created_at."""
        record = make_running()
        assert record.id == id_from_time(MARCH_4)
        assert len(record.id) == 10

    def test_explicit_id_kept(self):
        """An explicit id is never replaced."""
        record = make_running(id="0000000042")
        assert record.id == "0000000042"

    def test_label(self):
        """Label names the kind, month and day."""
        assert make_label(ActivityKind.CYCLING, MARCH_4) == "Cycling on March 4"
        assert make_running().label == "Running on March 4"


class TestDerivedMetrics:
    """Tests for pace and speed."""

    def test_running_pace(self):
        """Running pace is duration / distance."""
        record = make_running()
        assert record.pace == pytest.approx(24 / 5.2)
        assert record.metric == record.pace
        assert record.metric_unit == "min/km"

    def test_cycling_speed(self):
        """Cycling speed is distance / hours."""
        record = Cycling(coordinates=(19.0, 72.0), distance=27.0, duration=95.0, elevation_gain=523)
        assert record.speed == pytest.approx(27 / (95 / 60))
        assert record.speed == pytest.approx(17.05, abs=0.01)
        assert record.metric_unit == "km/h"

    def test_walking_pace(self):
        """Walking pace is duration / distance."""
        record = Walking(coordinates=(0.0, 0.0), distance=2.0, duration=30.0, step_count=3000)
        assert record.pace == pytest.approx(15.0)
        assert record.extra == 3000
        assert record.extra_field == "step_count"

    def test_kind_tags(self):
        """Each variant carries its own kind tag."""
        assert Running.kind is ActivityKind.RUNNING
        assert Cycling.kind is ActivityKind.CYCLING
        assert Walking.kind is ActivityKind.WALKING
        assert set(KIND_REGISTRY) == set(ActivityKind)


class TestImmutability:
    """Tests for the frozen core and the mutable usage counter."""

    def test_fields_frozen(self):
        """Inputs cannot be reassigned."""
        record = make_running()
        with pytest.raises(FrozenInstanceError):
            record.distance = 10.0  # type: ignore[misc]

    def test_metric_frozen(self):
        """Derived metric cannot be reassigned."""
        record = make_running()
        with pytest.raises(FrozenInstanceError):
            record.pace = 1.0  # type: ignore[misc]

    def test_usage_starts_at_zero(self):
        """New records have not been used."""
        assert make_running().usage_count == 0

    def test_mark_used_increments(self):
        """mark_used is the one mutation allowed."""
        record = make_running()
        assert record.mark_used() == 1
        assert record.mark_used() == 2
        assert record.usage_count == 2

    def test_base_is_abstract(self):
        """Record itself cannot be built."""
        with pytest.raises(TypeError):
            Record(coordinates=(0.0, 0.0), distance=1.0, duration=1.0)  # type: ignore[abstract]

    def test_hashable(self):
        """Records can be hashed despite the mutable counter."""
        record = make_running()
        record.mark_used()
        assert record in {record}


class TestToDict:
    """Tests for flattening."""

    def test_flat_fields(self):
        """to_dict holds the tag, inputs, counter and derived values."""
        record = make_running()
        record.mark_used()
        data = record.to_dict()

        assert data["kind"] == "running"
        assert data["id"] == record.id
        assert data["created_at"] == MARCH_4.isoformat()
        assert data["coordinates"] == [19.0, 72.0]
        assert data["distance"] == 5.2
        assert data["duration"] == 24.0
        assert data["cadence"] == 178
        assert data["usage_count"] == 1
        assert data["label"] == "Running on March 4"
        assert data["pace"] == pytest.approx(24 / 5.2)
        assert "elevation_gain" not in data
        assert "usage" not in data
