"""Standardized CLI option definitions shared by the commands."""

import typer

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Path to a YAML configuration file"
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository as OWNER/NAME (can be used multiple times, overrides config)",
)

OUTPUT_OPTION = typer.Option(
    "issues.csv", "--output", "-o", help="Destination CSV file"
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

START_DATE_OPTION = typer.Option(
    None,
    "--start-date",
    "-s",
    help="First day of the weekly buckets (YYYY-MM-DD, overrides config)",
)

EXCEL_OPTION = typer.Option(
    None,
    "--excel/--no-excel",
    help="Also write an .xlsx workbook (defaults to the config setting)",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
