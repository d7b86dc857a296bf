"""PDF report generation."""

from .pdf_report import (
    ReportContent,
    build_report_content,
    generate_report,
    report_filename,
    save_report,
)

__all__ = [
    "ReportContent",
    "build_report_content",
    "generate_report",
    "report_filename",
    "save_report",
]
