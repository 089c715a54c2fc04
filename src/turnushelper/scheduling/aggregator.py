"""Per-day aggregation of rotation duties and absences.

This module combines the resolved duty of every schedule with a single
absence lookup into one DailyReport.
"""

import logging
from datetime import date
from typing import Optional, Sequence

from turnushelper.config import ReportConfig
from turnushelper.domain.models import (
    DailyReport,
    ResolvedDay,
    RotationSchedule,
    reference_instant,
)
from turnushelper.scheduling.absences import AbsenceRegistry
from turnushelper.scheduling.resolver import DayResolver

logger = logging.getLogger(__name__)


class DailyReportAggregator:
    """Builds the presence report for a single date.

    Standing leave dominates: every member of a schedule resolved to
    standing leave is away, whether or not they have a recorded absence.
    On any other duty, a member is away iff the registry has an absence
    covering the reference instant of the date.

    Counts are taken per schedule roster, so a person on two schedules
    is counted twice.

    Example:
        >>> aggregator = DailyReportAggregator()
        >>> report = aggregator.build_report(schedules, registry, date(2024, 1, 3))
        >>> report.on_base_count, report.away_count
        (5, 2)
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        resolver: Optional[DayResolver] = None,
    ):
        self.config = config or ReportConfig()
        self.resolver = resolver or DayResolver()

    def build_report(
        self,
        schedules: Sequence[RotationSchedule],
        absence_registry: AbsenceRegistry,
        day: date,
    ) -> DailyReport:
        """Build the report for one date.

        Args:
            schedules: All rotation schedules, in display order.
            absence_registry: Loaded absences.
            day: The report date.

        Raises:
            ScheduleConfigError: If any schedule fails to resolve. No
                partial report is produced.
        """
        # Resolve everything first so a bad schedule fails the whole day
        resolved = self.resolve_all(schedules, day)

        absent = absence_registry.reasons_at(
            reference_instant(day, self.config.reference_hour)
        )

        total = 0
        away = 0
        for resolved_day in resolved:
            total += len(resolved_day.members)
            if resolved_day.is_standing_leave:
                resolved_day.absent_members = {m: None for m in resolved_day.members}
            else:
                resolved_day.absent_members = {
                    m: absent[m] if absent[m] is not None else self.config.missing_reason
                    for m in resolved_day.members
                    if m in absent
                }
            away += resolved_day.away_count

        report = DailyReport(
            date=day,
            days=resolved,
            on_base_count=total - away,
            away_count=away,
        )
        logger.debug(
            "%s: on base %d, away %d", day.isoformat(),
            report.on_base_count, report.away_count,
        )
        return report

    def resolve_all(
        self,
        schedules: Sequence[RotationSchedule],
        day: date,
    ) -> list[ResolvedDay]:
        """Resolve every schedule for a date without applying absences."""
        return [self.resolver.resolve_day(s, day) for s in schedules]
