"""Rendering of triage reports to CSV tables and Excel workbooks."""

from .tables import report_output_dir, write_csv_reports
from .workbook import WORKBOOK_FILENAME, write_workbook

__all__ = [
    "WORKBOOK_FILENAME",
    "report_output_dir",
    "write_csv_reports",
    "write_workbook",
]
