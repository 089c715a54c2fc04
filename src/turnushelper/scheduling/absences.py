"""Registry of absence intervals.

The registry is filled once and never mutated, so lookups are safe to
run from several threads at once.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from turnushelper.domain.models import AbsenceInterval, to_utc
from turnushelper.storage.loader import load_absences


class AbsenceRegistry:
    """Holds absence intervals and answers who is away at an instant.

    Example:
        >>> registry = AbsenceRegistry.load("fri.yml")
        >>> registry.reasons_at(datetime(2024, 1, 1, 12, tzinfo=timezone.utc))
        {'A': 'training'}
    """

    def __init__(self, intervals: Iterable[AbsenceInterval] = ()):
        self._intervals: tuple[AbsenceInterval, ...] = tuple(intervals)

    @classmethod
    def load(
        cls,
        source: Union[str, Path, Iterable[dict]],
    ) -> "AbsenceRegistry":
        """Create a registry from an absence file or parsed records.

        Raises:
            DataLoadError: If the source is unreadable or malformed.
            IntervalConfigError: If an absence does not end after it starts.
        """
        return cls(load_absences(source))

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[AbsenceInterval]:
        return iter(self._intervals)

    def _active_intervals(self, instant: datetime) -> list[AbsenceInterval]:
        instant = to_utc(instant)
        return [i for i in self._intervals if i.start < instant < i.end]

    def active_at(self, instant: datetime) -> set[tuple[str, Optional[str]]]:
        """All (person, reason) pairs for absences covering an instant.

        Bounds are exclusive: an absence starting or ending exactly at the
        instant is not included. A person with several overlapping
        absences appears once per distinct reason.
        """
        return {(i.person, i.reason) for i in self._active_intervals(instant)}

    def reasons_at(self, instant: datetime) -> dict[str, Optional[str]]:
        """Map each person away at an instant to one reason.

        When absences overlap, the reason of the earliest-starting one is
        used; ties keep the order the absences were loaded in.
        """
        active = sorted(self._active_intervals(instant), key=lambda i: i.start)
        reasons: dict[str, Optional[str]] = {}
        for interval in active:
            reasons.setdefault(interval.person, interval.reason)
        return reasons

    def intervals_for(self, person: str) -> list[AbsenceInterval]:
        """All intervals recorded for a person, in load order."""
        return [i for i in self._intervals if i.person == person]
