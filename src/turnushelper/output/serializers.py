"""JSON-friendly representation of daily reports."""

from typing import Iterable

from turnushelper.domain.models import DailyReport, ResolvedDay


def resolved_day_to_dict(day: ResolvedDay) -> dict:
    """Convert a ResolvedDay to a dict with members sorted by name."""
    return {
        "schedule_name": day.schedule_name,
        "duty_type": day.duty_type.value,
        "members": [
            {
                "member": member,
                "absent": day.is_absent(member),
                "reason": day.absent_members.get(member),
            }
            for member in sorted(day.members)
        ],
    }


def report_to_dict(report: DailyReport) -> dict:
    """Convert a DailyReport to a JSON-serializable dict."""
    return {
        "date": report.date.isoformat(),
        "schedules": [resolved_day_to_dict(day) for day in report.days],
        "on_base_count": report.on_base_count,
        "away_count": report.away_count,
    }


def reports_to_dicts(reports: Iterable[DailyReport]) -> list[dict]:
    """Convert reports to dicts in ascending date order."""
    return [report_to_dict(r) for r in sorted(reports, key=lambda r: r.date)]
