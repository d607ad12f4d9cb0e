"""Shared CLI option definitions so commands use the same flags."""

from pathlib import Path

import typer

from ..config import DEFAULT_USERNAME

USERNAME_OPTION = typer.Option(
    DEFAULT_USERNAME, "--username", "-u", help="GitHub user whose repositories to use"
)

TOKEN_OPTION = typer.Option(
    None,
    "--token",
    "-t",
    help="GitHub personal access token (defaults to GITHUB_TOKEN)",
)

OUTPUT_DIR_OPTION = typer.Option(
    Path("."), "--output-dir", "-d", help="Directory for the JSON output files"
)

CONCURRENCY_OPTION = typer.Option(
    20,
    "--concurrency",
    "-c",
    min=0,
    help="Issue requests in flight at once (0 for no limit)",
)

RATE_LIMIT_OPTION = typer.Option(
    None,
    "--rate-limit",
    min=0.01,
    help="Maximum requests started per second",
)

ISSUES_MEDIA_TYPE_OPTION = typer.Option(
    None,
    "--issues-media-type",
    help="Accept header for issue lists (default: reactions preview)",
)
