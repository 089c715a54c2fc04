"""Shared fixtures for rotation report tests."""

from datetime import datetime, timezone

import pytest

from turnushelper.domain.models import AbsenceInterval, DutyType, RotationSchedule
from turnushelper.scheduling.absences import AbsenceRegistry


def utc(*args) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def alpha():
    """Two-day day/night rotation starting 2024-01-01."""
    return RotationSchedule(
        name="Alpha",
        start=utc(2024, 1, 1),
        cycle={0: DutyType.DAY_SHIFT, 1: DutyType.NIGHT_SHIFT},
        members=("A", "B"),
    )


@pytest.fixture
def bravo():
    """Single-day cycle that is always on standing leave."""
    return RotationSchedule(
        name="Bravo",
        start=utc(2024, 1, 1),
        cycle={0: DutyType.STANDING_LEAVE},
        members=("C",),
    )


@pytest.fixture
def training_absence():
    return AbsenceInterval(
        person="A",
        start=utc(2024, 1, 1, 0, 0),
        end=utc(2024, 1, 1, 23, 59),
        reason="training",
    )


@pytest.fixture
def registry(training_absence):
    return AbsenceRegistry([training_absence])
