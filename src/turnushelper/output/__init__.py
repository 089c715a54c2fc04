"""Output generation for presence reports (text, JSON, PDF)."""

from turnushelper.output.pdf_generator import PDFReportGenerator
from turnushelper.output.serializers import report_to_dict, reports_to_dicts
from turnushelper.output.text_generator import TextReportGenerator

__all__ = [
    "PDFReportGenerator",
    "TextReportGenerator",
    "report_to_dict",
    "reports_to_dicts",
]
