"""Error taxonomy for configuration and data-loading defects.

Every error raised by the core derives from TurnusError so callers can
catch the whole family at the top level while still distinguishing
fatal load failures from per-day resolution failures.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union


class TurnusError(Exception):
    """Base class for all turnushelper errors."""

    pass


class DataLoadError(TurnusError):
    """Raised when a schedule or absence source is unreadable or malformed.

    Attributes:
        source: The path or description of the source that failed.
    """

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None):
        self.source = str(source) if source is not None else None
        if self.source:
            message = f"{self.source}: {message}"
        super().__init__(message)


class ScheduleConfigError(TurnusError):
    """Raised when a schedule's cycle lacks an entry for a required offset.

    Attributes:
        schedule_name: Name of the offending schedule.
        offset: Zero-based day offset that could not be found.
        date: The date being resolved when the gap was hit.
    """

    def __init__(
        self,
        schedule_name: str,
        offset: int,
        date: Optional[date] = None,
        message: Optional[str] = None,
    ):
        self.schedule_name = schedule_name
        self.offset = offset
        self.date = date
        if message is None:
            message = (
                f"Schedule '{schedule_name}' has no duty for day offset {offset}"
            )
            if date is not None:
                message += f" (resolving {date.isoformat()})"
        super().__init__(message)


class IntervalConfigError(TurnusError):
    """Raised when an absence interval does not end after it starts."""

    def __init__(self, person: str, start: datetime, end: datetime):
        self.person = person
        self.start = start
        self.end = end
        super().__init__(
            f"Absence for '{person}' ends at {end.isoformat()}, "
            f"which is not after its start {start.isoformat()}"
        )
