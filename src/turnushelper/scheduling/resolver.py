"""Date-to-duty resolution for rotation schedules.

The day offset of a date is the signed number of days since the
schedule's start date, taken modulo the schedule's own cycle length.
Offsets are zero-based and used as-is to look up the duty, so a schedule
may have any cycle length and dates before the start still resolve.
"""

from datetime import date, datetime

from turnushelper.domain.errors import ScheduleConfigError
from turnushelper.domain.models import DutyType, ResolvedDay, RotationSchedule, to_utc


def _as_date(day) -> date:
    if isinstance(day, datetime):
        return to_utc(day).date()
    return day


def day_offset(schedule: RotationSchedule, day: date) -> int:
    """Zero-based position of a date within the schedule's cycle.

    Raises:
        ScheduleConfigError: If the schedule has an empty cycle.
    """
    day = _as_date(day)
    if schedule.cycle_length == 0:
        raise ScheduleConfigError(
            schedule.name,
            0,
            day,
            message=f"Schedule '{schedule.name}' has no days in its cycle",
        )
    # Python's modulo is non-negative for a positive divisor
    return (day - schedule.start_date).days % schedule.cycle_length


class DayResolver:
    """Resolves which duty a rotation schedule assigns to a date.

    Example:
        >>> resolver = DayResolver()
        >>> resolver.resolve(schedule, date(2024, 1, 3))
        <DutyType.DAY_SHIFT: 'Day'>
    """

    def resolve(self, schedule: RotationSchedule, day: date) -> DutyType:
        """Get the duty type for a date.

        Args:
            schedule: The rotation schedule.
            day: Date to resolve. A datetime is reduced to its UTC date.

        Raises:
            ScheduleConfigError: If the computed offset has no duty.
        """
        day = _as_date(day)
        offset = day_offset(schedule, day)
        duty = schedule.cycle.get(offset)
        if duty is None:
            raise ScheduleConfigError(schedule.name, offset, day)
        return duty

    def resolve_day(self, schedule: RotationSchedule, day: date) -> ResolvedDay:
        """Resolve a date into a ResolvedDay with no absences applied."""
        day = _as_date(day)
        return ResolvedDay(
            schedule_name=schedule.name,
            duty_type=self.resolve(schedule, day),
            date=day,
            members=schedule.members,
        )
