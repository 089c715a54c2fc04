"""Domain models for rotation schedules and absence reporting.

This module contains the core data structures shared by the resolver,
the absence registry and the report aggregator: duty types, rotation
schedules, absence intervals, and the derived per-day report types.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from turnushelper.domain.errors import IntervalConfigError


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def reference_instant(day: date, hour: int = 12) -> datetime:
    """Instant used for absence lookups on a given date (noon UTC by default)."""
    return datetime.combine(day, time(hour=hour), tzinfo=timezone.utc)


class DutyType(Enum):
    """Duty assigned to one day of a rotation cycle.

    Values are the tags used in schedule files.
    """

    EDUCATION = "Education"
    STANDING_LEAVE = "Perm"  # On leave by rotation
    DAY_SHIFT = "Day"
    NIGHT_SHIFT = "Night"

    @classmethod
    def from_tag(cls, tag: str) -> "DutyType":
        """Look up a duty type from a file tag, member name or long name.

        Raises:
            ValueError: If the tag matches no duty type.
        """
        key = str(tag).strip().replace("_", "").replace(" ", "").lower()
        for duty in cls:
            aliases = {
                duty.value.lower(),
                duty.name.replace("_", "").lower(),
            }
            if key in aliases:
                return duty
        raise ValueError(f"Unknown duty type: {tag!r}")

    @property
    def label(self) -> str:
        """Human-readable name."""
        return _DUTY_LABELS[self]

    @property
    def is_leave(self) -> bool:
        return self is DutyType.STANDING_LEAVE


_DUTY_LABELS = {
    DutyType.EDUCATION: "Education",
    DutyType.STANDING_LEAVE: "Standing leave",
    DutyType.DAY_SHIFT: "Day shift",
    DutyType.NIGHT_SHIFT: "Night shift",
}


@dataclass(frozen=True)
class RotationSchedule:
    """A named, cyclically repeating duty pattern with a fixed roster.

    Attributes:
        name: Identifier, unique within a run.
        start: Instant whose UTC calendar date is day offset zero.
        cycle: Mapping from zero-based day offset to duty type. Every
            offset in [0, len(cycle)) is expected to be present.
        members: Person identifiers on this schedule's roster.
    """

    name: str
    start: datetime
    cycle: Mapping[int, DutyType]
    members: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "cycle", MappingProxyType(dict(self.cycle)))
        object.__setattr__(self, "members", tuple(self.members))

    @property
    def start_date(self) -> date:
        """Calendar date (UTC) of day offset zero."""
        return self.start.date()

    @property
    def cycle_length(self) -> int:
        return len(self.cycle)

    @property
    def roster_size(self) -> int:
        return len(self.members)

    def missing_offsets(self) -> list[int]:
        """Offsets in [0, cycle_length) that have no duty assigned."""
        return [i for i in range(self.cycle_length) if i not in self.cycle]


@dataclass(frozen=True)
class AbsenceInterval:
    """A time-bounded record stating that a person is away.

    The interval is active at instant T iff start < T < end; an absence
    starting or ending exactly at T does not count.

    Attributes:
        person: Identifier matched against schedule members by equality.
        start: Start of the absence ("from" in absence files).
        end: End of the absence ("to" in absence files).
        reason: Optional free-text explanation.
    """

    person: str
    start: datetime
    end: datetime
    reason: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))
        if self.start >= self.end:
            raise IntervalConfigError(self.person, self.start, self.end)

    def is_active_at(self, instant: datetime) -> bool:
        """Check whether the absence covers an instant (exclusive bounds)."""
        instant = to_utc(instant)
        return self.start < instant < self.end


@dataclass
class ResolvedDay:
    """One schedule's duty and absences on a single date.

    Attributes:
        schedule_name: Name of the resolved schedule.
        duty_type: Duty the schedule resolves to on this date.
        date: The resolved date.
        members: The schedule's roster.
        absent_members: Away members mapped to the reason they are away.
            On standing-leave days every member is listed.
    """

    schedule_name: str
    duty_type: DutyType
    date: date
    members: tuple[str, ...] = ()
    absent_members: dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def is_standing_leave(self) -> bool:
        return self.duty_type.is_leave

    def is_absent(self, member: str) -> bool:
        return member in self.absent_members

    @property
    def present_members(self) -> list[str]:
        return [m for m in self.members if m not in self.absent_members]

    @property
    def away_count(self) -> int:
        return len(self.absent_members)


@dataclass
class DailyReport:
    """Aggregated presence report for one date.

    Counts are per schedule roster: a person on two schedules is counted
    once for each.

    Attributes:
        date: The report date.
        days: One ResolvedDay per schedule, in schedule order.
        on_base_count: Members not away.
        away_count: Members away, by standing leave or recorded absence.
    """

    date: date
    days: list[ResolvedDay] = field(default_factory=list)
    on_base_count: int = 0
    away_count: int = 0

    @property
    def total_count(self) -> int:
        return self.on_base_count + self.away_count

    def get_day(self, schedule_name: str) -> Optional[ResolvedDay]:
        """Get the resolved day for a schedule by name."""
        for day in self.days:
            if day.schedule_name == schedule_name:
                return day
        return None
