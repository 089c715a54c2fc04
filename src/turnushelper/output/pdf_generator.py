"""PDF generation for presence reports.

This module creates printable PDF reports showing, per day:
- The on-base and away summary
- Each schedule's duty with its member list
- Away members highlighted with their reason
"""

from io import BytesIO
from pathlib import Path
from typing import Sequence, Union

from turnushelper.domain.models import DailyReport, DutyType, ResolvedDay
from turnushelper.output.text_generator import DATE_FORMAT

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    DutyType.EDUCATION: (0.4, 0.4, 0.8),  # Blue
    DutyType.STANDING_LEAVE: (0.6, 0.6, 0.6),  # Gray
    DutyType.DAY_SHIFT: (0.4, 0.7, 0.4),  # Green
    DutyType.NIGHT_SHIFT: (0.2, 0.2, 0.5),  # Dark blue
    "away": (0.8, 0.2, 0.2),  # Red
    "summary": (0.1, 0.5, 0.1),  # Dark green
}


def _import_canvas():
    try:
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas


class PDFReportGenerator:
    """Generates printable PDF presence reports.

    Example:
        >>> generator = PDFReportGenerator()
        >>> generator.generate(reports, "presence.pdf")
    """

    def __init__(
        self,
        page_width: float = 612,  # Letter portrait width (8.5")
        page_height: float = 792,  # Letter portrait height (11")
        margin: float = 36,  # 0.5 inch margins
        line_height: float = 14,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.line_height = line_height

    def generate(
        self,
        reports: Sequence[DailyReport],
        output_path: Union[str, Path],
    ) -> None:
        """Generate PDF report and save to file.

        Args:
            reports: Reports to render in order.
            output_path: Path to save the PDF.
        """
        canvas = _import_canvas()
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw_reports(c, reports)
        c.save()

    def generate_to_buffer(self, reports: Sequence[DailyReport]) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas = _import_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw_reports(c, reports)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_reports(self, c, reports: Sequence[DailyReport]) -> None:
        """Draw all reports, flowing onto new pages as needed."""
        y = self._top()
        page_num = 1
        self._draw_footer(c, page_num)

        for report in reports:
            # Keep a day's summary with the first line of its first schedule
            if y - self.line_height * 5 < self.margin + 20:
                c.showPage()
                page_num += 1
                self._draw_footer(c, page_num)
                y = self._top()

            y = self._draw_summary(c, report, y)

            for day in report.days:
                rows = 1 + len(day.members)
                if y - rows * self.line_height < self.margin + 20:
                    c.showPage()
                    page_num += 1
                    self._draw_footer(c, page_num)
                    y = self._top()
                y = self._draw_day(c, day, y)

            y -= self.line_height

        c.showPage()

    def _top(self) -> float:
        return self.page_height - self.margin - 10

    def _draw_footer(self, c, page_num: int) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        c.drawCentredString(self.page_width / 2, self.margin - 10, f"Page {page_num}")

    def _draw_summary(self, c, report: DailyReport, y: float) -> float:
        """Draw the separator and the day's summary line."""
        c.setStrokeColorRGB(0.5, 0.5, 0.5)
        c.setLineWidth(0.5)
        c.line(self.margin, y, self.page_width - self.margin, y)
        y -= self.line_height * 1.5

        c.setFillColorRGB(*COLORS["summary"])
        c.setFont("Helvetica-Bold", 12)
        c.drawString(
            self.margin,
            y,
            f"{report.date.strftime(DATE_FORMAT)}. "
            f"On base: {report.on_base_count}. Away: {report.away_count}",
        )
        return y - self.line_height * 1.2

    def _draw_day(self, c, day: ResolvedDay, y: float) -> float:
        """Draw one schedule block and return the next free y position."""
        x = self.margin + 12

        c.setFillColorRGB(*COLORS.get(day.duty_type, (0.5, 0.5, 0.5)))
        c.rect(x, y - 2, 8, 8, fill=1, stroke=0)
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 10)
        c.drawString(x + 14, y, f"{day.schedule_name} | {day.duty_type.label}")
        y -= self.line_height

        c.setFont("Helvetica", 9)
        for member in sorted(day.members):
            if day.is_standing_leave:
                c.setFillColorRGB(*COLORS["away"])
                text = f"- {member} (standing leave)"
            elif day.is_absent(member):
                c.setFillColorRGB(*COLORS["away"])
                text = f"- {member} (away: {day.absent_members[member]})"
            else:
                c.setFillColorRGB(0, 0, 0)
                text = f"- {member}"
            c.drawString(x + 20, y, text)
            y -= self.line_height

        c.setFillColorRGB(0, 0, 0)
        return y
