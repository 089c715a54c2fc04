"""Domain models and errors for rotation reporting."""

from turnushelper.domain.errors import (
    DataLoadError,
    IntervalConfigError,
    ScheduleConfigError,
    TurnusError,
)
from turnushelper.domain.models import (
    AbsenceInterval,
    DailyReport,
    DutyType,
    ResolvedDay,
    RotationSchedule,
    reference_instant,
    to_utc,
)

__all__ = [
    # Models
    "AbsenceInterval",
    "DailyReport",
    "DutyType",
    "ResolvedDay",
    "RotationSchedule",
    "reference_instant",
    "to_utc",
    # Errors
    "DataLoadError",
    "IntervalConfigError",
    "ScheduleConfigError",
    "TurnusError",
]
