"""End-to-end collection run: repositories, then their issues, then the aggregate."""

import asyncio
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .config import RunConfig
from .github_client.client import GitHubRestClient
from .github_client.models import FetchResult, RepositoryRecord, RunReport
from .storage.manager import OutputManager
from .throttle import RequestThrottle

console = Console()
error_console = Console(stderr=True)


async def run_collection(
    config: RunConfig, http_client: httpx.AsyncClient | None = None
) -> RunReport:
    """Collect repositories and open issues for ``config.username``.

    The aggregate file is written even when parts of the run fail: a failed
    issue fetch leaves ``null`` in that repository's slot, and a failed
    repository fetch leaves ``null`` as the whole ``data`` value.

    Args:
        config: Run configuration
        http_client: HTTP client to use; one is opened for the run if omitted

    Returns:
        RunReport describing what was collected
    """
    output = OutputManager(config.output_dir)

    if http_client is not None:
        return await _collect(config, http_client, output)

    async with httpx.AsyncClient() as http:
        return await _collect(config, http, output)


async def _collect(
    config: RunConfig, http: httpx.AsyncClient, output: OutputManager
) -> RunReport:
    client = GitHubRestClient(config, http, output)
    report = RunReport(username=config.username)

    console.print(f"🔎 Fetching repositories of {config.username}...")
    repos_result = await client.fetch_repositories(config.username)

    if not repos_result.ok or repos_result.value is None:
        error_console.print("[red]❌ There seem to have been errors[/red]")
        error_console.print(f"   Repository list unavailable: {repos_result.error}")
        report.repositories_stage_failed = True
        report.aggregate_path = _save_aggregate(output, config.username, None)
        return report

    records = [_to_record(raw) for raw in repos_result.value]
    report.repository_count = len(records)
    console.print(f"📋 Fetching open issues of {len(records)} repositories...")

    throttle = RequestThrottle(config.concurrency, config.requests_per_second)
    tasks = [
        asyncio.create_task(_enrich(client, throttle, record)) for record in records
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    data: list[dict[str, Any] | None] = []
    for raw, record, result in zip(repos_result.value, records, results):
        label = record.full_name if record else _describe(raw)

        if isinstance(result, BaseException):
            error_console.print(
                f"[red]❌ Issue fetch for {label} crashed: {escape(str(result))}[/red]"
            )
            report.failed_repositories.append(label)
            data.append(None)
        elif not result.ok or result.value is None:
            report.failed_repositories.append(label)
            data.append(None)
        else:
            report.enriched_count += 1
            data.append(result.value.to_json())

    console.print(
        f"✅ Collected issues for {report.enriched_count}/"
        f"{report.repository_count} repositories"
    )
    report.aggregate_path = _save_aggregate(output, config.username, data)
    return report


async def _enrich(
    client: GitHubRestClient,
    throttle: RequestThrottle,
    record: RepositoryRecord | None,
) -> FetchResult[RepositoryRecord]:
    if record is None:
        return FetchResult.failure("not a repository object")
    return await throttle.run(lambda: client.fetch_issues(record))


def _to_record(raw: Any) -> RepositoryRecord | None:
    try:
        return RepositoryRecord.model_validate(raw)
    except ValidationError as e:
        error_console.print(
            f"[red]❌ Skipping malformed repository entry "
            f"{escape(_describe(raw))}: {escape(str(e))}[/red]"
        )
        return None


def _describe(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("full_name") or raw.get("name") or "<unnamed>")
    return repr(raw)


def _save_aggregate(
    output: OutputManager, username: str, data: list[dict[str, Any] | None] | None
) -> Path | None:
    try:
        return output.save_aggregate(username, data)
    except OSError as e:
        error_console.print(
            f"[red]❌ Could not write aggregate for {username}: {e}[/red]"
        )
        return None
