"""CLI command for downloading repository issues to CSV."""

import time

import typer
from rich.console import Console
from rich.table import Table

from ..config import RepositoryRef, load_config
from ..github_client.client import GraphQLClient
from ..github_client.fetcher import DownloadResult, IssueFetcher
from ..storage.csv_store import IssueCsvStore
from ..utils.log_setup import setup_logging
from .options import (
    CONFIG_OPTION,
    OUTPUT_OPTION,
    REPO_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()

FETCH_FAILED_EXIT_CODE = 2


def download(
    config_path: str | None = CONFIG_OPTION,
    repo: list[str] | None = REPO_OPTION,
    output: str = OUTPUT_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Download every issue of the configured repositories to a CSV file.

    Repositories are read from the configuration file unless --repo is given.

    Examples:
        gh-triage download --config triage.yaml
        gh-triage download --repo dotnet/maui --output maui-issues.csv
    """
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        repositories = (
            [RepositoryRef.parse(value) for value in repo]
            if repo
            else config.repositories
        )
    except ValueError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    if not repositories:
        console.print(
            "❌ Error: No repositories to download. "
            "Add 'repositories' to the config file or pass --repo OWNER/NAME"
        )
        raise typer.Exit(1)

    params_table = Table(title="Download Parameters")
    params_table.add_column("Parameter", style="cyan")
    params_table.add_column("Value", style="green")
    params_table.add_row("Repositories", ", ".join(str(r) for r in repositories))
    params_table.add_row("Output", output)
    params_table.add_row("Page Size", str(config.page_size))
    params_table.add_row(
        "Retry", f"{config.max_retries} x {config.retry_delay_seconds:g}s"
    )
    console.print(params_table)

    store = IssueCsvStore(output)
    try:
        store.ensure_writable()
    except OSError as e:
        console.print(f"❌ Unable to write {output}: {e}")
        raise typer.Exit(1)

    try:
        console.print("🔑 Initializing GitHub client...")
        client = GraphQLClient(token=token, endpoint=config.endpoint)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    started = time.perf_counter()
    result = DownloadResult()
    try:
        with client:
            fetcher = IssueFetcher.from_config(client, config)
            result = fetcher.fetch_repositories(repositories, result)
    finally:
        # Whatever was collected is written, even when the run failed or was
        # interrupted
        try:
            written = store.write_issues(result.rows)
        except OSError as e:
            console.print(f"❌ Unable to write {output}: {e}")
            raise typer.Exit(1)

    results_table = Table(title="Download Results")
    results_table.add_column("Repository", style="cyan")
    results_table.add_column("Issues", justify="right", style="green")
    results_table.add_column("Reported", justify="right", style="yellow")
    results_table.add_column("Pages", justify="right")
    results_table.add_column("State", style="magenta")
    for repo_result in result.repositories:
        reported = repo_result.total_count
        results_table.add_row(
            f"{repo_result.owner}/{repo_result.name}",
            str(len(repo_result.rows)),
            str(reported) if reported is not None else "-",
            str(repo_result.pages),
            repo_result.state.value,
        )
    console.print(results_table)

    elapsed_ms = (time.perf_counter() - started) * 1000
    console.print(f"💾 Wrote {written} issues to {store.path}")
    console.print(f"Done writing CSV in {elapsed_ms:.0f}ms")

    if not result.succeeded:
        console.print("❌ Download failed. Check that the GitHub token is valid.")
        raise typer.Exit(FETCH_FAILED_EXIT_CODE)

    console.print("✨ Download complete!")
