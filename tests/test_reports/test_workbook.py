"""Tests for the Excel workbook renderer."""

import re
from datetime import date, datetime, timezone
from pathlib import Path
from zipfile import ZipFile

from openpyxl import load_workbook

from gh_triage.analysis.models import (
    AreaTriageSummary,
    CategoryWeek,
    MilestoneBreakdown,
    TriageReport,
    WeeklyBucket,
)
from gh_triage.reports.workbook import (
    AREA_SHEET,
    CATEGORY_SHEET,
    SUMMARY_SHEET,
    WEEKLY_SHEET,
    write_workbook,
)


def make_report(with_categories: bool = False) -> TriageReport:
    return TriageReport(
        generated_at=datetime(2021, 6, 20, tzinfo=timezone.utc),
        start_date=date(2021, 6, 1),
        target_milestones=["6.0.100", "6.0.200"],
        weekly=[
            WeeklyBucket(week_start=date(2021, 6, 1), opened=3, closed=1),
            WeeklyBucket(week_start=date(2021, 6, 8), opened=2, closed=2),
        ],
        areas=[
            AreaTriageSummary(
                area="area/a", count_in_target_milestones=1, count_untriaged=4
            ),
            AreaTriageSummary(area=None, count_untriaged=2),
        ],
        category_labels=["t/bug"] if with_categories else [],
        categories=(
            [CategoryWeek(week_start=date(2021, 6, 1), counts={"t/bug": 2})]
            if with_categories
            else []
        ),
        breakdown=MilestoneBreakdown(
            total_issues=10, open_bugs=6, target=1, untriaged=6
        ),
    )


class TestWriteWorkbook:
    """Test write_workbook."""

    def test_sheets_and_values(self, tmp_path: Path) -> None:
        path = write_workbook(tmp_path / "nested" / "report.xlsx", make_report())

        workbook = load_workbook(path)
        assert workbook.sheetnames == [WEEKLY_SHEET, AREA_SHEET, SUMMARY_SHEET]

        weekly = workbook[WEEKLY_SHEET]
        assert [cell.value for cell in weekly[1]] == [
            "Week",
            "IssuesOpened",
            "IssuesClosed",
        ]
        assert [cell.value for cell in weekly[2]] == ["2021-06-01", 3, 1]
        assert weekly["A1"].font.bold

        areas = workbook[AREA_SHEET]
        assert areas["A3"].value == "(no area)"
        assert areas.column_dimensions["A"].width == 30

        summary = workbook[SUMMARY_SHEET]
        values = {row[0].value: row[1].value for row in summary.iter_rows(min_row=2)}
        assert values["Total issues"] == 10
        assert values["GA milestones"] == "6.0.100, 6.0.200"

    def test_charts_are_added(self, tmp_path: Path) -> None:
        path = write_workbook(tmp_path / "report.xlsx", make_report())

        # openpyxl drops charts on load, so inspect the package parts instead
        with ZipFile(path) as archive:
            names = archive.namelist()
        charts = [n for n in names if re.fullmatch(r"xl/charts/chart\d+\.xml", n)]
        assert len(charts) == 2

    def test_category_sheet(self, tmp_path: Path) -> None:
        path = write_workbook(tmp_path / "report.xlsx", make_report(True))

        workbook = load_workbook(path)
        assert CATEGORY_SHEET in workbook.sheetnames
        sheet = workbook[CATEGORY_SHEET]
        assert [cell.value for cell in sheet[1]] == ["Week", "t/bug"]
        assert sheet["B2"].value == 2
