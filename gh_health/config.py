"""Run configuration for a collection run."""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from . import __version__

GITHUB_API = "https://api.github.com"
DEFAULT_USERNAME = "paazmaya"

# https://developer.github.com/changes/2016-05-12-reactions-api-preview/
REACTIONS_PREVIEW_MEDIA_TYPE = "application/vnd.github.squirrel-girl-preview"
STABLE_MEDIA_TYPE = "application/vnd.github.v3+json"


class RunConfig(BaseModel):
    """Settings for one collection run.

    Built once at process start and handed to every component that talks to
    the API or writes output.
    """

    token: str = Field("", description="GitHub personal access token")
    username: str = Field(DEFAULT_USERNAME, description="GitHub user to collect")
    api_base: str = Field(GITHUB_API, description="GitHub REST API base URL")
    user_agent: str = Field(
        f"github-repo-health/{__version__}", description="User-Agent header value"
    )
    repo_type: str = Field("all", description="Repository type filter")
    per_page: int = Field(40, ge=1, le=100, description="Entries per page")
    page: int = Field(1, ge=1, description="Page to request")
    repos_media_type: str = Field(
        STABLE_MEDIA_TYPE, description="Accept header for the repository list"
    )
    issues_media_type: str = Field(
        REACTIONS_PREVIEW_MEDIA_TYPE,
        description="Accept header for issue lists (includes reactions)",
    )
    concurrency: int = Field(
        20, ge=0, description="Issue requests in flight at once, 0 for no limit"
    )
    requests_per_second: float | None = Field(
        None, gt=0, description="Upper bound on request starts per second"
    )
    timeout: float | None = Field(
        30.0, gt=0, description="Per-request timeout in seconds, None to disable"
    )
    output_dir: Path = Field(Path("."), description="Directory for JSON output")

    @classmethod
    def from_env(cls, **overrides: Any) -> "RunConfig":
        """Build a config, taking the token from GITHUB_TOKEN unless given.

        An unset variable yields an empty token; requests are still sent with
        it, the API then answers as for an anonymous or invalid client.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        values.setdefault("token", os.getenv("GITHUB_TOKEN", ""))
        return cls(**values)

    @property
    def authorization(self) -> str:
        # HTTP header values must not end in whitespace.
        return f"token {self.token}".rstrip()
