"""Reading schedule and absence definitions from files."""

from turnushelper.storage.loader import (
    load_absences,
    load_schedule_file,
    load_schedules,
    parse_absence,
    parse_schedule,
)

__all__ = [
    "load_absences",
    "load_schedule_file",
    "load_schedules",
    "parse_absence",
    "parse_schedule",
]
