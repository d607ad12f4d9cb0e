"""Output manager for collected repository and issue data."""

import json
from pathlib import Path
from typing import Any

from rich.console import Console

console = Console()

SAFE_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.-_"
)


def _safe_name(value: str) -> str:
    """Replace characters that could leave the output directory with ``_``.

    GitHub user and repository names only use safe characters, so they pass
    through unchanged.
    """
    return "".join(c if c in SAFE_CHARS else "_" for c in str(value))


class OutputManager:
    """Writes raw API responses and the run aggregate as JSON files.

    Every file wraps its payload in a single top-level key: ``repos`` for a
    raw repository page, ``issues`` for a raw issue list and ``data`` for the
    aggregate.
    """

    def __init__(self, output_dir: str | Path = ".", create: bool = True):
        """Initialize output manager.

        Args:
            output_dir: Directory the JSON files are written to
            create: Create the directory if it does not exist yet
        """
        self.output_dir = Path(output_dir)
        if create:
            self.output_dir.mkdir(parents=True, exist_ok=True)

    def repositories_filename(self, username: str, repo_type: str, page: int) -> str:
        return f"repos-{_safe_name(username)}-{_safe_name(repo_type)}-{page}.json"

    def issues_filename(self, short_name: str) -> str:
        return f"issues-{_safe_name(short_name)}.json"

    def aggregate_filename(self, username: str) -> str:
        return f"repos-{_safe_name(username)}.json"

    def _write(self, filename: str, key: str, payload: Any) -> Path:
        """Write ``{key: payload}`` pretty-printed to ``filename``.

        Args:
            filename: Name of the file inside the output directory
            key: Top-level wrapper key
            payload: JSON-serializable data

        Returns:
            Path to the written file
        """
        file_path = self.output_dir / filename

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(
                    {key: payload},
                    f,
                    indent=2,
                    ensure_ascii=False,
                    default=str,
                )
            return file_path

        except OSError as e:
            console.print(f"Error writing {file_path}: {e}")
            raise

    def save_repositories(
        self, username: str, repo_type: str, page: int, repos: Any
    ) -> Path:
        """Save one raw page of the repository list."""
        filename = self.repositories_filename(username, repo_type, page)
        return self._write(filename, "repos", repos)

    def save_issues(self, short_name: str, issues: Any) -> Path:
        """Save the raw issue list of one repository."""
        return self._write(self.issues_filename(short_name), "issues", issues)

    def save_aggregate(
        self, username: str, data: list[dict[str, Any] | None] | None
    ) -> Path:
        """Save the enriched repository list of a run.

        Args:
            username: GitHub user the run collected
            data: Enriched repositories in repository order, ``None`` for
                each failed issue fetch, or ``None`` as a whole when the
                repository list itself could not be fetched

        Returns:
            Path to the aggregate file
        """
        file_path = self._write(self.aggregate_filename(username), "data", data)
        console.print(f"💾 Saved aggregate to {file_path}")
        return file_path

    def load_aggregate(self, username: str) -> list[dict[str, Any] | None] | None:
        """Load the aggregate written by a previous run.

        Returns:
            The ``data`` list of the aggregate file

        Raises:
            FileNotFoundError: If no aggregate exists for the user
            ValueError: If the file is not valid JSON or not an aggregate
        """
        file_path = self.output_dir / self.aggregate_filename(username)
        with open(file_path, encoding="utf-8") as f:
            content = json.load(f)

        if not isinstance(content, dict) or "data" not in content:
            raise ValueError(f"{file_path} has no top-level 'data' key")
        data = content["data"]
        if data is not None and not isinstance(data, list):
            raise ValueError(f"{file_path}: 'data' must be a list or null")
        return data
