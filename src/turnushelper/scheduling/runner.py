"""Report generation over a range of consecutive days.

The ReportRunner drives the aggregator across a date range. It takes
the start date as an argument; only the CLI asks the clock for "today".
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

from turnushelper.config import ReportConfig
from turnushelper.domain.models import DailyReport, RotationSchedule
from turnushelper.scheduling.absences import AbsenceRegistry
from turnushelper.scheduling.aggregator import DailyReportAggregator


def today_utc() -> date:
    """Current date on the reference clock (UTC)."""
    return datetime.now(timezone.utc).date()


class ReportRunner:
    """High-level driver producing one report per day in a range.

    Example:
        >>> runner = ReportRunner()
        >>> reports = runner.build_reports(schedules, registry, date(2024, 1, 1), 7)
        >>> len(reports)
        7
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        aggregator: Optional[DailyReportAggregator] = None,
    ):
        self.config = config or ReportConfig()
        self.aggregator = aggregator or DailyReportAggregator(config=self.config)

    def build_reports(
        self,
        schedules: Sequence[RotationSchedule],
        absence_registry: AbsenceRegistry,
        start_date: Optional[date] = None,
        days: int = 1,
    ) -> list[DailyReport]:
        """Build reports for `days` consecutive dates, ascending.

        Args:
            schedules: All rotation schedules.
            absence_registry: Loaded absences.
            start_date: First report date. Defaults to today (UTC).
            days: Number of reports to build.

        Returns:
            Exactly `days` reports. If any date fails, the error propagates
            and no reports are returned.

        Raises:
            ValueError: If `days` is negative.
            ScheduleConfigError: If a schedule fails to resolve on any date.
        """
        if days < 0:
            raise ValueError(f"Number of days must not be negative, got {days}")
        if start_date is None:
            start_date = today_utc()

        return [
            self.aggregator.build_report(
                schedules, absence_registry, start_date + timedelta(days=i)
            )
            for i in range(days)
        ]

    def build_reports_with_stats(
        self,
        schedules: Sequence[RotationSchedule],
        absence_registry: AbsenceRegistry,
        start_date: Optional[date] = None,
        days: int = 1,
    ) -> tuple[list[DailyReport], dict]:
        """Build reports and return summary statistics.

        Returns:
            Tuple of (reports, stats_dict).
        """
        reports = self.build_reports(schedules, absence_registry, start_date, days)
        return reports, self._calculate_stats(reports, schedules)

    def _calculate_stats(
        self,
        reports: list[DailyReport],
        schedules: Sequence[RotationSchedule],
    ) -> dict:
        """Calculate range statistics."""
        on_base = [r.on_base_count for r in reports]

        return {
            "days": len(reports),
            "schedules": len(schedules),
            "roster_total": sum(s.roster_size for s in schedules),
            "min_on_base": min(on_base) if on_base else 0,
            "max_on_base": max(on_base) if on_base else 0,
            "avg_on_base": sum(on_base) / len(on_base) if on_base else 0,
            "total_away_days": sum(r.away_count for r in reports),
        }
