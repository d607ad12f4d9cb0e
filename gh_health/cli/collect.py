"""CLI commands for collecting repositories and inspecting the result."""

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import RunConfig
from ..runner import run_collection
from ..storage.manager import OutputManager
from .options import (
    CONCURRENCY_OPTION,
    ISSUES_MEDIA_TYPE_OPTION,
    OUTPUT_DIR_OPTION,
    RATE_LIMIT_OPTION,
    TOKEN_OPTION,
    USERNAME_OPTION,
)

console = Console()


def collect(
    username: str = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
    output_dir: Path = OUTPUT_DIR_OPTION,
    concurrency: int = CONCURRENCY_OPTION,
    rate_limit: float | None = RATE_LIMIT_OPTION,
    issues_media_type: str | None = ISSUES_MEDIA_TYPE_OPTION,
) -> None:
    """Collect a user's repositories and their open issues as JSON files.

    Writes repos-USER-all-1.json, one issues-REPO.json per repository and
    the aggregate repos-USER.json into the output directory. Only the first
    page of each list is fetched.

    Examples:
        github-health collect
        github-health collect --username octocat --output-dir data
        github-health collect -u octocat --concurrency 5 --rate-limit 2
    """
    try:
        config = RunConfig.from_env(
            username=username,
            token=token,
            output_dir=output_dir,
            concurrency=concurrency,
            requests_per_second=rate_limit,
            issues_media_type=issues_media_type,
        )
    except ValidationError as e:
        console.print(f"❌ Invalid configuration: {e}")
        raise typer.Exit(1)

    params_table = Table(title="Collection Parameters")
    params_table.add_column("Parameter", style="cyan")
    params_table.add_column("Value", style="green")
    params_table.add_row("Username", config.username)
    params_table.add_row("Token", "set" if config.token else "not set")
    params_table.add_row("Repository Type", config.repo_type)
    params_table.add_row("Page Size", str(config.per_page))
    params_table.add_row(
        "Concurrency", str(config.concurrency) if config.concurrency else "unlimited"
    )
    if config.requests_per_second:
        params_table.add_row("Rate Limit", f"{config.requests_per_second}/s")
    params_table.add_row("Output Directory", str(config.output_dir))
    console.print(params_table)

    if not config.token:
        console.print(
            "[yellow]⚠️  GITHUB_TOKEN is not set, requests use an empty token"
            "[/yellow]"
        )

    report = asyncio.run(run_collection(config))

    if report.repositories_stage_failed:
        console.print(f"[red]Repository list for {config.username} not fetched[/red]")
    else:
        console.print(
            f"[blue]Summary: {report.enriched_count}/{report.repository_count} "
            f"repositories enriched ({len(report.failed_repositories)} failed)[/blue]"
        )
    if report.failed_repositories:
        console.print(f"Failed: {', '.join(report.failed_repositories)}")
    if report.aggregate_path:
        console.print(f"Aggregate: {report.aggregate_path}")


def summary(
    username: str = USERNAME_OPTION,
    output_dir: Path = OUTPUT_DIR_OPTION,
) -> None:
    """Show open issue and pull request counts from a collected aggregate."""
    output = OutputManager(output_dir, create=False)
    aggregate_file = output_dir / output.aggregate_filename(username)

    try:
        data = output.load_aggregate(username)
    except FileNotFoundError:
        console.print(f"❌ No aggregate found: {aggregate_file}")
        console.print("Run the collect command first.")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"❌ Could not read aggregate {aggregate_file}")
        console.print(f"   {escape(str(e))}")
        raise typer.Exit(1)

    if data is None:
        console.print(
            f"[yellow]Repository list for {username} was not fetched "
            "in the last run.[/yellow]"
        )
        return

    table = Table(title=f"Open Work for {username}")
    table.add_column("Repository", style="cyan")
    table.add_column("Issues", justify="right", style="green")
    table.add_column("Pull Requests", justify="right", style="green")

    missing = 0
    total_issues = 0
    total_pulls = 0
    for entry in data:
        if not isinstance(entry, dict):
            missing += 1
            continue
        issues = len(entry.get("issues") or [])
        pulls = len(entry.get("pullrequests") or [])
        total_issues += issues
        total_pulls += pulls
        table.add_row(str(entry.get("full_name", "?")), str(issues), str(pulls))

    table.add_row("Total", str(total_issues), str(total_pulls), style="bold")
    console.print(table)

    if missing:
        console.print(
            f"[yellow]{missing} repositories have no issue data "
            "(fetch failed)[/yellow]"
        )
