"""Render a triage report into an Excel workbook with charts."""

import logging
from pathlib import Path

import pandas as pd
from openpyxl.chart import BarChart, LineChart, Reference
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..analysis.models import TriageReport
from .tables import area_frame, category_frame, summary_frame, weekly_frame

logger = logging.getLogger(__name__)

WORKBOOK_FILENAME = "triage-report.xlsx"

WEEKLY_SHEET = "Weekly"
AREA_SHEET = "Area Triage"
CATEGORY_SHEET = "Categories"
SUMMARY_SHEET = "Summary"

COLUMN_WIDTHS = {
    WEEKLY_SHEET: [12, 14, 14],
    AREA_SHEET: [30, 12, 16],
    SUMMARY_SHEET: [24, 40],
}


def style_headers(worksheet: Worksheet, widths: list[int] | None = None) -> None:
    """Bold the header row and apply column widths where given."""
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
    for index, width in enumerate(widths or [], start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = width


def add_line_chart(
    worksheet: Worksheet, title: str, data_rows: int, series_columns: int
) -> None:
    """Plot columns 2..N against column 1 as categories."""
    if data_rows == 0 or series_columns == 0:
        return
    chart = LineChart()
    chart.title = title
    chart.y_axis.title = "Issues"
    chart.x_axis.title = "Week"
    chart.width = 30
    chart.height = 12

    data = Reference(
        worksheet,
        min_col=2,
        max_col=1 + series_columns,
        min_row=1,
        max_row=data_rows + 1,
    )
    categories = Reference(worksheet, min_col=1, min_row=2, max_row=data_rows + 1)
    chart.add_data(data, titles_from_data=True)
    chart.set_categories(categories)
    worksheet.add_chart(chart, f"{get_column_letter(series_columns + 3)}2")


def add_area_chart(worksheet: Worksheet, data_rows: int) -> None:
    if data_rows == 0:
        return
    chart = BarChart()
    chart.type = "bar"
    chart.title = "Open bugs by area"
    chart.x_axis.title = "Area"
    chart.y_axis.title = "Issues"
    chart.width = 24
    chart.height = max(8, data_rows * 0.6)

    data = Reference(worksheet, min_col=2, max_col=3, min_row=1, max_row=data_rows + 1)
    categories = Reference(worksheet, min_col=1, min_row=2, max_row=data_rows + 1)
    chart.add_data(data, titles_from_data=True)
    chart.set_categories(categories)
    worksheet.add_chart(chart, "E2")


def write_workbook(path: str | Path, report: TriageReport) -> Path:
    """Write the report to a multi-sheet workbook.

    Args:
        path: Destination ``.xlsx`` file
        report: Aggregated triage report

    Returns:
        Path to the written workbook
    """
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)

    weekly = weekly_frame(report.weekly)
    areas = area_frame(report.areas)
    summary = summary_frame(report.breakdown, report.target_milestones)

    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        weekly.to_excel(writer, sheet_name=WEEKLY_SHEET, index=False)
        areas.to_excel(writer, sheet_name=AREA_SHEET, index=False)
        if report.category_labels:
            categories = category_frame(report.categories, report.category_labels)
            categories.to_excel(writer, sheet_name=CATEGORY_SHEET, index=False)
            sheet = writer.sheets[CATEGORY_SHEET]
            style_headers(sheet, [12] + [16] * len(report.category_labels))
            add_line_chart(
                sheet,
                "Issues opened per category",
                len(categories),
                len(report.category_labels),
            )
        summary.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)

        for name in (WEEKLY_SHEET, AREA_SHEET, SUMMARY_SHEET):
            style_headers(writer.sheets[name], COLUMN_WIDTHS[name])

        add_line_chart(
            writer.sheets[WEEKLY_SHEET], "Issues opened/closed per week", len(weekly), 2
        )
        add_area_chart(writer.sheets[AREA_SHEET], len(areas))

    logger.info("Saved triage workbook to %s", output)
    return output
