"""CLI command for building triage reports from an issues CSV."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..analysis.models import TriageReport
from ..analysis.report import build_triage_report
from ..config import load_config
from ..reports.tables import report_output_dir, write_csv_reports
from ..reports.workbook import WORKBOOK_FILENAME, write_workbook
from ..storage.csv_store import IssueCsvStore
from ..utils.date_parser import parse_date_input, validate_start_date
from ..utils.log_setup import setup_logging
from .options import CONFIG_OPTION, EXCEL_OPTION, START_DATE_OPTION, VERBOSE_OPTION

console = Console()

USAGE = "Usage: gh-triage analyze path/to/issues.csv"


def analyze(
    issues_csv: str | None = typer.Argument(
        None, help="Issues CSV produced by 'gh-triage download'"
    ),
    config_path: str | None = CONFIG_OPTION,
    start_date: str | None = START_DATE_OPTION,
    excel: bool | None = EXCEL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Compute weekly open/closed counts and per-area bug triage.

    Results are written next to the input file, in a directory named after it.

    Examples:
        gh-triage analyze issues.csv
        gh-triage analyze issues.csv --start-date 2022-01-01 --no-excel
    """
    setup_logging(verbose)

    if issues_csv is None:
        console.print(USAGE)
        raise typer.Exit(1)

    input_path = Path(issues_csv)
    if not input_path.is_file():
        console.print(f"❌ Error: Input file not found: {input_path}")
        console.print(USAGE)
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
        start = parse_date_input(start_date) if start_date else None
        if start is not None:
            validate_start_date(start)
    except ValueError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    try:
        rows = IssueCsvStore(input_path).read_issues()
    except ValueError as e:
        console.print(f"❌ Error reading {input_path}: {e}")
        raise typer.Exit(1)
    console.print(f"📥 Loaded {len(rows)} rows of data")

    report = build_triage_report(rows, config, start_date=start)
    output_dir = report_output_dir(input_path)

    try:
        written = write_csv_reports(output_dir, report)
        render_excel = config.report.excel if excel is None else excel
        if render_excel:
            written["workbook"] = write_workbook(output_dir / WORKBOOK_FILENAME, report)
    except OSError as e:
        console.print(f"❌ Unable to write reports to {output_dir}: {e}")
        raise typer.Exit(1)

    print_summary(report)
    for name, path in written.items():
        console.print(f"💾 Saved {name} to: {path}")
    console.print("✨ Done")


def print_summary(report: TriageReport) -> None:
    """Show milestone breakdown and area triage tables."""
    breakdown = report.breakdown
    summary_table = Table(title="Bug Summary")
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Count", justify="right", style="green")
    summary_table.add_row("Total issues", str(breakdown.total_issues))
    summary_table.add_row("Open BUG issues", str(breakdown.open_bugs))
    summary_table.add_row("GA BUG issues", str(breakdown.target))
    summary_table.add_row("Future BUG issues", str(breakdown.future))
    summary_table.add_row("Untriaged BUG issues", str(breakdown.untriaged))
    summary_table.add_row("Unknown BUG issues", str(breakdown.unknown))
    console.print(summary_table)

    if not report.areas:
        console.print("No open bugs found.")
        return

    area_table = Table(title="Open Bugs by Area")
    area_table.add_column("Area", style="cyan")
    area_table.add_column("GA", justify="right", style="green")
    area_table.add_column("Untriaged", justify="right", style="yellow")
    for summary in report.areas:
        area_table.add_row(
            summary.display_area,
            str(summary.count_in_target_milestones),
            str(summary.count_untriaged),
        )
    console.print(area_table)
