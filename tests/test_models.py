"""Tests for domain models."""

from datetime import date, datetime, timedelta, timezone

import pytest

from turnushelper.domain.errors import IntervalConfigError
from turnushelper.domain.models import (
    AbsenceInterval,
    DailyReport,
    DutyType,
    ResolvedDay,
    RotationSchedule,
    reference_instant,
    to_utc,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestDutyType:
    """Tests for DutyType tag parsing."""

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("Education", DutyType.EDUCATION),
            ("Perm", DutyType.STANDING_LEAVE),
            ("Day", DutyType.DAY_SHIFT),
            ("Night", DutyType.NIGHT_SHIFT),
            ("StandingLeave", DutyType.STANDING_LEAVE),
            ("standing_leave", DutyType.STANDING_LEAVE),
            ("DAY_SHIFT", DutyType.DAY_SHIFT),
            ("nightshift", DutyType.NIGHT_SHIFT),
        ],
    )
    def test_from_tag(self, tag, expected):
        assert DutyType.from_tag(tag) == expected

    def test_unknown_tag(self):
        with pytest.raises(ValueError):
            DutyType.from_tag("Holiday")

    def test_only_standing_leave_is_leave(self):
        assert [d for d in DutyType if d.is_leave] == [DutyType.STANDING_LEAVE]


class TestRotationSchedule:
    """Tests for RotationSchedule."""

    def test_naive_start_is_utc(self):
        schedule = RotationSchedule(
            name="X", start=datetime(2024, 1, 1), cycle={0: DutyType.DAY_SHIFT}
        )
        assert schedule.start == utc(2024, 1, 1)
        assert schedule.start_date == date(2024, 1, 1)

    def test_start_date_uses_utc(self):
        """A start late in the evening west of UTC falls on the next UTC day."""
        tz = timezone(timedelta(hours=-5))
        schedule = RotationSchedule(
            name="X",
            start=datetime(2024, 1, 1, 22, 0, tzinfo=tz),
            cycle={0: DutyType.DAY_SHIFT},
        )
        assert schedule.start_date == date(2024, 1, 2)

    def test_cycle_is_read_only(self, alpha):
        with pytest.raises(TypeError):
            alpha.cycle[2] = DutyType.EDUCATION

    def test_members_become_tuple(self):
        schedule = RotationSchedule(
            name="X", start=utc(2024, 1, 1), cycle={0: DutyType.DAY_SHIFT},
            members=["A", "B"],
        )
        assert schedule.members == ("A", "B")
        assert schedule.roster_size == 2

    def test_missing_offsets(self):
        schedule = RotationSchedule(
            name="X",
            start=utc(2024, 1, 1),
            cycle={0: DutyType.DAY_SHIFT, 2: DutyType.NIGHT_SHIFT, 5: DutyType.EDUCATION},
        )
        assert schedule.cycle_length == 3
        assert schedule.missing_offsets() == [1]

    def test_complete_cycle_has_no_missing_offsets(self, alpha):
        assert alpha.missing_offsets() == []


class TestAbsenceInterval:
    """Tests for AbsenceInterval."""

    def test_end_before_start_rejected(self):
        with pytest.raises(IntervalConfigError) as exc_info:
            AbsenceInterval(person="A", start=utc(2024, 1, 2), end=utc(2024, 1, 1))
        assert exc_info.value.person == "A"

    def test_empty_interval_rejected(self):
        with pytest.raises(IntervalConfigError):
            AbsenceInterval(person="A", start=utc(2024, 1, 1), end=utc(2024, 1, 1))

    def test_bounds_are_exclusive(self, training_absence):
        assert training_absence.is_active_at(utc(2024, 1, 1, 12))
        assert not training_absence.is_active_at(training_absence.start)
        assert not training_absence.is_active_at(training_absence.end)

    def test_naive_query_is_utc(self, training_absence):
        assert training_absence.is_active_at(datetime(2024, 1, 1, 12))


class TestReportTypes:
    """Tests for ResolvedDay and DailyReport helpers."""

    def test_resolved_day_helpers(self):
        day = ResolvedDay(
            schedule_name="Alpha",
            duty_type=DutyType.DAY_SHIFT,
            date=date(2024, 1, 1),
            members=("A", "B", "C"),
            absent_members={"B": "sick"},
        )
        assert day.is_absent("B")
        assert not day.is_absent("A")
        assert day.present_members == ["A", "C"]
        assert day.away_count == 1
        assert not day.is_standing_leave

    def test_daily_report_lookup(self):
        day = ResolvedDay("Alpha", DutyType.DAY_SHIFT, date(2024, 1, 1), ("A",))
        report = DailyReport(date=date(2024, 1, 1), days=[day], on_base_count=1)
        assert report.get_day("Alpha") is day
        assert report.get_day("Missing") is None
        assert report.total_count == 1


class TestTimeHelpers:
    """Tests for to_utc and reference_instant."""

    def test_to_utc_converts_offsets(self):
        tz = timezone(timedelta(hours=1))
        assert to_utc(datetime(2024, 1, 1, 13, tzinfo=tz)) == utc(2024, 1, 1, 12)

    def test_reference_instant_is_noon_utc(self):
        assert reference_instant(date(2024, 1, 1)) == utc(2024, 1, 1, 12)

    def test_reference_instant_custom_hour(self):
        assert reference_instant(date(2024, 1, 1), 8) == utc(2024, 1, 1, 8)
