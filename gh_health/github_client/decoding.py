"""Lenient JSON decoding for GitHub API payloads."""

import json
from typing import Any

from rich.console import Console

error_console = Console(stderr=True)


def parse_json(text: str | bytes) -> Any:
    """Parse data that is expected to be JSON, such as a GitHub API response.

    Args:
        text: Raw response body

    Returns:
        The decoded value, or an empty dict when the input is not valid JSON.
        Decode errors are reported on stderr and never raised.

    See https://docs.github.com/en/rest/using-the-rest-api/getting-started-with-the-rest-api
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        error_console.print("[red]❌ Could not parse JSON input[/red]")
        error_console.print(f"   {type(e).__name__}: {e}")
        return {}
