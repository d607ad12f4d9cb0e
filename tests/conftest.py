"""Test configuration and fixtures."""

from pathlib import Path
from typing import Any

import pytest

from gh_health.config import RunConfig


@pytest.fixture
def run_config(tmp_path: Path) -> RunConfig:
    """Config writing into a temporary output directory."""
    return RunConfig(token="test_token", username="testuser", output_dir=tmp_path)


@pytest.fixture
def sample_repos() -> list[dict[str, Any]]:
    """Two repositories as returned by the repository list endpoint."""
    return [
        {"id": 1, "full_name": "testuser/alpha", "name": "alpha", "private": False},
        {"id": 2, "full_name": "testuser/beta", "name": "beta", "private": False},
    ]


@pytest.fixture
def sample_issues() -> list[dict[str, Any]]:
    """Issue list mixing issues and pull requests."""
    return [
        {"id": 1, "number": 10, "title": "Crash on start"},
        {"id": 2, "number": 11, "title": "Fix crash", "pull_request": {}},
        {"id": 3, "number": 12, "title": "Docs typo"},
        {
            "id": 4,
            "number": 13,
            "title": "Add docs",
            "pull_request": {"url": "https://api.github.com/repos/x/y/pulls/13"},
        },
    ]
