"""Plain-text output for daily reports.

Each day starts with a separator and a summary line, followed by one
block per schedule listing its members in name order:

    -------------------------------------------------

    Wednesday 03. January 2024. On base: 3. Away: 1
      Alpha | Day shift
       - A
       - B (away: training)
      Bravo | Standing leave
       - C (standing leave)
"""

from pathlib import Path
from typing import Sequence, Union

from turnushelper.domain.models import DailyReport, ResolvedDay

SEPARATOR = "-" * 49
DATE_FORMAT = "%A %d. %B %Y"


class TextReportGenerator:
    """Generates plain-text presence reports."""

    def __init__(self, date_format: str = DATE_FORMAT):
        self.date_format = date_format

    def generate(
        self,
        reports: Sequence[DailyReport],
        output_path: Union[str, Path],
    ) -> str:
        """Generate text output and save to file.

        Args:
            reports: Reports to render, one block per report.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self.generate_to_string(reports)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(self, reports: Sequence[DailyReport]) -> str:
        """Generate text output and return as string."""
        lines = []
        for report in reports:
            lines.extend(self._report_lines(report))
        return "\n".join(lines) + "\n" if lines else ""

    def summary_line(self, report: DailyReport) -> str:
        return (
            f"{report.date.strftime(self.date_format)}. "
            f"On base: {report.on_base_count}. Away: {report.away_count}"
        )

    def _report_lines(self, report: DailyReport) -> list[str]:
        lines = [SEPARATOR, "", self.summary_line(report)]
        for day in report.days:
            lines.extend(self._day_lines(day))
        return lines

    def _day_lines(self, day: ResolvedDay) -> list[str]:
        lines = [f"  {day.schedule_name} | {day.duty_type.label}"]
        for member in sorted(day.members):
            if day.is_standing_leave:
                lines.append(f"   - {member} (standing leave)")
            elif day.is_absent(member):
                lines.append(f"   - {member} (away: {day.absent_members[member]})")
            else:
                lines.append(f"   - {member}")
        return lines
