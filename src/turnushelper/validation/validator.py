"""Validation module for verifying daily report consistency.

Checks a built DailyReport against the schedules it was built from:
counts reconcile with roster sizes, every duty matches a fresh
resolution, standing-leave rosters are fully away, and only roster
members are marked absent.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from turnushelper.domain.models import DailyReport, ResolvedDay, RotationSchedule
from turnushelper.scheduling.resolver import DayResolver


class ValidationErrorType(Enum):
    """Types of validation errors."""

    COUNT_MISMATCH = "count_mismatch"
    UNKNOWN_SCHEDULE = "unknown_schedule"
    DUTY_MISMATCH = "duty_mismatch"
    STANDING_LEAVE_MEMBER_PRESENT = "standing_leave_member_present"
    ABSENT_NON_MEMBER = "absent_non_member"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    schedule_name: Optional[str] = None
    member: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.schedule_name:
            parts.append(f"Schedule {self.schedule_name}:")
        parts.append(self.message)
        if self.member is not None:
            parts.append(f"({self.member})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a report."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


class ReportValidator:
    """Validates daily reports against their schedules.

    Example:
        >>> validator = ReportValidator()
        >>> result = validator.validate(report, schedules)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, resolver: Optional[DayResolver] = None):
        self.resolver = resolver or DayResolver()

    def validate(
        self,
        report: DailyReport,
        schedules: Sequence[RotationSchedule],
    ) -> ValidationResult:
        """Validate a single daily report.

        Args:
            report: The report to check.
            schedules: The schedules the report was built from.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        schedules_map = {s.name: s for s in schedules}

        for day in report.days:
            schedule = schedules_map.get(day.schedule_name)
            if schedule is None:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_SCHEDULE,
                        message="Report references an unknown schedule",
                        schedule_name=day.schedule_name,
                    )
                )
                continue

            self._validate_day(day, schedule, report, result)

        self._validate_counts(report, schedules, result)
        self._check_shared_members(schedules, result)
        self._check_cycle_gaps(schedules, result)

        return result

    def validate_all(
        self,
        reports: Sequence[DailyReport],
        schedules: Sequence[RotationSchedule],
    ) -> ValidationResult:
        """Validate a range of reports, merging all errors and warnings."""
        combined = ValidationResult(is_valid=True)
        for report in reports:
            result = self.validate(report, schedules)
            for error in result.errors:
                combined.add_error(error)
            for warning in result.warnings:
                if warning not in combined.warnings:
                    combined.add_warning(warning)
        return combined

    def _validate_day(
        self,
        day: ResolvedDay,
        schedule: RotationSchedule,
        report: DailyReport,
        result: ValidationResult,
    ) -> None:
        """Validate one schedule's entry in the report."""
        expected = self.resolver.resolve(schedule, report.date)
        if day.duty_type != expected:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.DUTY_MISMATCH,
                    message=(
                        f"Duty {day.duty_type.value} on {report.date} doesn't match "
                        f"resolved duty {expected.value}"
                    ),
                    schedule_name=schedule.name,
                    details={"actual": day.duty_type, "expected": expected},
                )
            )

        roster = set(schedule.members)
        for member in day.absent_members:
            if member not in roster:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.ABSENT_NON_MEMBER,
                        message="Absent person is not on the roster",
                        schedule_name=schedule.name,
                        member=member,
                    )
                )

        if day.is_standing_leave:
            for member in schedule.members:
                if member not in day.absent_members:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.STANDING_LEAVE_MEMBER_PRESENT,
                            message="Member on standing leave is not marked away",
                            schedule_name=schedule.name,
                            member=member,
                        )
                    )

    def _validate_counts(
        self,
        report: DailyReport,
        schedules: Sequence[RotationSchedule],
        result: ValidationResult,
    ) -> None:
        """Check on-base and away counts against roster sizes."""
        roster_total = sum(s.roster_size for s in schedules)
        if report.total_count != roster_total:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.COUNT_MISMATCH,
                    message=(
                        f"On base {report.on_base_count} + away {report.away_count} "
                        f"doesn't equal roster total {roster_total}"
                    ),
                    details={"roster_total": roster_total},
                )
            )

        marked_away = sum(day.away_count for day in report.days)
        if report.away_count != marked_away:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.COUNT_MISMATCH,
                    message=(
                        f"Away count {report.away_count} doesn't match "
                        f"{marked_away} members marked away"
                    ),
                    details={"marked_away": marked_away},
                )
            )

    def _check_cycle_gaps(
        self,
        schedules: Sequence[RotationSchedule],
        result: ValidationResult,
    ) -> None:
        """Warn about cycle offsets that would fail to resolve on other dates."""
        for schedule in schedules:
            missing = schedule.missing_offsets()
            if missing:
                result.add_warning(
                    f"Schedule '{schedule.name}' has no duty for day offsets "
                    f"{', '.join(str(o) for o in missing)}"
                )

    def _check_shared_members(
        self,
        schedules: Sequence[RotationSchedule],
        result: ValidationResult,
    ) -> None:
        """Warn about people counted on more than one roster."""
        counts = Counter(m for s in schedules for m in s.members)
        for member, count in sorted(counts.items()):
            if count > 1:
                result.add_warning(
                    f"{member} is on {count} schedules and is counted once for each"
                )
