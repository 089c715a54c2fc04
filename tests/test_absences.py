"""Tests for the absence registry."""

from datetime import datetime, timezone

import pytest

from turnushelper.domain.errors import DataLoadError, IntervalConfigError
from turnushelper.domain.models import AbsenceInterval
from turnushelper.scheduling.absences import AbsenceRegistry


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestActiveAt:
    """Tests for AbsenceRegistry.active_at."""

    def test_active_during_interval(self, registry):
        """Querying at noon includes A with the recorded reason."""
        assert registry.active_at(utc(2024, 1, 1, 12)) == {("A", "training")}

    def test_inactive_next_day(self, registry):
        assert registry.active_at(utc(2024, 1, 2, 0, 0)) == set()

    def test_start_boundary_excluded(self, registry):
        assert registry.active_at(utc(2024, 1, 1, 0, 0)) == set()

    def test_end_boundary_excluded(self, registry):
        assert registry.active_at(utc(2024, 1, 1, 23, 59)) == set()

    def test_exactly_matching_people(self):
        """Only intervals with start < t < end are returned."""
        registry = AbsenceRegistry([
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 3), "leave"),
            AbsenceInterval("B", utc(2024, 1, 2, 12), utc(2024, 1, 4), "course"),
            AbsenceInterval("C", utc(2024, 1, 1), utc(2024, 1, 2, 12), None),
            AbsenceInterval("D", utc(2024, 1, 5), utc(2024, 1, 6), "later"),
        ])
        assert registry.active_at(utc(2024, 1, 2, 12)) == {("A", "leave")}
        assert registry.active_at(utc(2024, 1, 2, 11)) == {("A", "leave"), ("C", None)}

    def test_empty_registry(self):
        assert AbsenceRegistry().active_at(utc(2024, 1, 1)) == set()


class TestReasonsAt:
    """Tests for AbsenceRegistry.reasons_at."""

    def test_single_absence(self, registry):
        assert registry.reasons_at(utc(2024, 1, 1, 12)) == {"A": "training"}

    def test_missing_reason_is_none(self):
        registry = AbsenceRegistry([
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 2)),
        ])
        assert registry.reasons_at(utc(2024, 1, 1, 12)) == {"A": None}

    def test_overlap_uses_earliest_start(self):
        """Overlapping absences give the earliest-starting interval's reason."""
        registry = AbsenceRegistry([
            AbsenceInterval("A", utc(2024, 1, 1, 6), utc(2024, 1, 2), "course"),
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 3), "leave"),
        ])
        assert registry.reasons_at(utc(2024, 1, 1, 12)) == {"A": "leave"}
        assert registry.active_at(utc(2024, 1, 1, 12)) == {
            ("A", "course"),
            ("A", "leave"),
        }

    def test_overlap_same_start_keeps_load_order(self):
        registry = AbsenceRegistry([
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 2), "first"),
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 5), "second"),
        ])
        assert registry.reasons_at(utc(2024, 1, 1, 12)) == {"A": "first"}


class TestRegistryLoad:
    """Tests for AbsenceRegistry.load."""

    def test_load_from_records(self):
        registry = AbsenceRegistry.load([
            {"name": "A", "from": "2024-01-01T00:00:00Z", "to": "2024-01-01T23:59:00Z",
             "reason": "training"},
            {"name": "B", "from": "2024-01-05T00:00:00Z", "to": "2024-01-06T00:00:00Z"},
        ])
        assert len(registry) == 2
        assert registry.intervals_for("B")[0].reason is None
        assert registry.reasons_at(utc(2024, 1, 1, 12)) == {"A": "training"}

    def test_load_rejects_reversed_interval(self):
        with pytest.raises(IntervalConfigError):
            AbsenceRegistry.load([
                {"name": "A", "from": "2024-01-02T00:00:00Z", "to": "2024-01-01T00:00:00Z"},
            ])

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            AbsenceRegistry.load(tmp_path / "missing.yml")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "fri.yml"
        path.write_text(
            "- name: A\n"
            "  from: 2024-01-01T00:00:00Z\n"
            "  to: 2024-01-01T23:59:00Z\n"
            "  reason: training\n"
        )
        registry = AbsenceRegistry.load(path)
        assert registry.active_at(utc(2024, 1, 1, 12)) == {("A", "training")}

    def test_iteration_keeps_load_order(self):
        intervals = [
            AbsenceInterval("B", utc(2024, 1, 2), utc(2024, 1, 3)),
            AbsenceInterval("A", utc(2024, 1, 1), utc(2024, 1, 3)),
        ]
        assert list(AbsenceRegistry(intervals)) == intervals
