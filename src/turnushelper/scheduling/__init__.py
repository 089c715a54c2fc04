"""Duty resolution, absence lookup and daily report aggregation."""

from turnushelper.scheduling.absences import AbsenceRegistry
from turnushelper.scheduling.aggregator import DailyReportAggregator
from turnushelper.scheduling.resolver import DayResolver, day_offset
from turnushelper.scheduling.runner import ReportRunner, today_utc

__all__ = [
    # Core
    "DayResolver",
    "AbsenceRegistry",
    "DailyReportAggregator",
    # Date ranges
    "ReportRunner",
    # Helpers
    "day_offset",
    "today_utc",
]
