"""Tabular views of a triage report and their CSV output."""

import logging
from pathlib import Path

import pandas as pd

from ..analysis.models import (
    AreaTriageSummary,
    CategoryWeek,
    MilestoneBreakdown,
    TriageReport,
    WeeklyBucket,
)

logger = logging.getLogger(__name__)

WEEKLY_FILENAME = "openclosed-by-week.csv"
AREA_FILENAME = "area-triage.csv"
CATEGORY_FILENAME = "category-by-week.csv"

WEEKLY_COLUMNS = ["Week", "IssuesOpened", "IssuesClosed"]
AREA_COLUMNS = ["Area", "IssuesForGA", "IssuesUntriaged"]


def weekly_frame(buckets: list[WeeklyBucket]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [bucket.week_start.isoformat(), bucket.opened, bucket.closed]
            for bucket in buckets
        ],
        columns=WEEKLY_COLUMNS,
    )


def area_frame(summaries: list[AreaTriageSummary]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                summary.display_area,
                summary.count_in_target_milestones,
                summary.count_untriaged,
            ]
            for summary in summaries
        ],
        columns=AREA_COLUMNS,
    )


def category_frame(weeks: list[CategoryWeek], labels: list[str]) -> pd.DataFrame:
    """One row per week, one column per category label."""
    records = []
    for week in weeks:
        counts = [week.counts.get(label, 0) for label in labels]
        records.append([week.week_start.isoformat(), *counts])
    return pd.DataFrame(records, columns=["Week", *labels])


def summary_frame(breakdown: MilestoneBreakdown, targets: list[str]) -> pd.DataFrame:
    rows = [
        ("Total issues", breakdown.total_issues),
        ("Open BUG issues", breakdown.open_bugs),
        ("GA BUG issues", breakdown.target),
        ("Future BUG issues", breakdown.future),
        ("Untriaged BUG issues", breakdown.untriaged),
        ("Unknown BUG issues", breakdown.unknown),
        ("GA milestones", ", ".join(targets)),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def report_output_dir(input_path: str | Path) -> Path:
    """Directory next to the input file, named after its base name."""
    path = Path(input_path).resolve()
    return path.parent / path.stem


def write_csv_reports(
    output_dir: str | Path, report: TriageReport
) -> dict[str, Path]:
    """Write the weekly, area and (when configured) category tables as CSV.

    Returns:
        Mapping of table name to written path
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written: dict[str, Path] = {}
    tables = [
        ("weekly", WEEKLY_FILENAME, weekly_frame(report.weekly)),
        ("areas", AREA_FILENAME, area_frame(report.areas)),
    ]
    if report.category_labels:
        tables.append(
            (
                "categories",
                CATEGORY_FILENAME,
                category_frame(report.categories, report.category_labels),
            )
        )

    for name, filename, frame in tables:
        path = directory / filename
        frame.to_csv(path, index=False, encoding="utf-8-sig")
        logger.info("Saved %s table to %s", name, path)
        written[name] = path

    return written
