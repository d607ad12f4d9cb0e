"""Async GitHub REST client for repository and issue lists."""

from typing import Any

import httpx
from rich.console import Console

from ..config import RunConfig
from ..storage.manager import OutputManager
from .decoding import parse_json
from .models import FetchResult, RepositoryRecord
from .partition import split_issues_pull_requests

console = Console()
error_console = Console(stderr=True)

RATE_LIMIT_WARNING_THRESHOLD = 10


class GitHubRestClient:
    """Fetches the first page of a user's repositories and their open issues.

    Responses are written to disk as they arrive. Pagination links are
    reported but never followed, so only one page of each list is collected.
    Failures are returned as ``FetchResult.failure`` instead of raised.
    """

    def __init__(
        self,
        config: RunConfig,
        http: httpx.AsyncClient,
        output: OutputManager,
    ):
        """Initialize the client.

        Args:
            config: Run configuration holding token, API base and user agent
            http: Shared async HTTP client for the run
            output: Where raw responses are saved
        """
        self.config = config
        self.http = http
        self.output = output

    def _headers(self, accept: str) -> dict[str, str]:
        return {
            "Accept": accept,
            "Authorization": self.config.authorization,
            "User-Agent": self.config.user_agent,
        }

    def _report_response(self, url: httpx.URL, response: httpx.Response) -> str | None:
        """Log URL, status, rate limit and pagination details of a response.

        Returns:
            URL of the next page when the API advertises one
        """
        console.print(f"url {url}")
        console.print(f"{response.status_code}")

        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None and remaining.isdigit():
            if int(remaining) < RATE_LIMIT_WARNING_THRESHOLD:
                console.print(
                    f"[yellow]⚠️  GitHub API rate limit low: "
                    f"{remaining} requests remaining[/yellow]"
                )

        link = response.headers.get("link")
        if link is None:
            return None

        # More pages exist; they are not fetched.
        console.print(link)
        return response.links.get("next", {}).get("url")

    async def _get(
        self, url: httpx.URL, accept: str
    ) -> tuple[httpx.Response | None, str | None]:
        """Issue a GET request.

        Returns:
            ``(response, None)`` on a 2xx answer, otherwise ``(response or
            None, reason)``
        """
        try:
            response = await self.http.get(
                url,
                headers=self._headers(accept),
                timeout=self.config.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
            return response, None

        except httpx.HTTPStatusError as e:
            error_console.print("[red]❌ Some issues with the GitHub API call[/red]")
            error_console.print(
                f"   {e.response.status_code} {e.response.reason_phrase}: {url}"
            )
            return e.response, f"HTTP {e.response.status_code}"
        except httpx.HTTPError as e:
            error_console.print("[red]❌ Some issues with the GitHub API call[/red]")
            error_console.print(f"   {type(e).__name__}: {e}")
            return None, f"{type(e).__name__}: {e}"

    async def fetch_repositories(
        self, username: str
    ) -> FetchResult[list[dict[str, Any]]]:
        """Get one page of repositories of the given user.

        Args:
            username: GitHub username

        Returns:
            FetchResult holding the decoded repository list

        See https://docs.github.com/en/rest/repos/repos#list-repositories-for-a-user
        """
        params = {
            "type": self.config.repo_type,
            "sort": "full_name",
            "direction": "asc",
            "per_page": self.config.per_page,
            "page": self.config.page,
        }
        url = httpx.URL(
            f"{self.config.api_base}/users/{username}/repos", params=params
        )

        response, error = await self._get(url, self.config.repos_media_type)
        if error is not None or response is None:
            status = response.status_code if response is not None else None
            return FetchResult.failure(error or "no response", status_code=status)

        next_link = self._report_response(url, response)
        repos = parse_json(response.content)

        try:
            self.output.save_repositories(
                username, self.config.repo_type, self.config.page, repos
            )
        except OSError as e:
            error_console.print(f"[red]❌ Could not save repository list: {e}[/red]")
            return FetchResult.failure(str(e), status_code=response.status_code)

        if not isinstance(repos, list):
            error_console.print(
                f"[red]❌ Expected a list of repositories from {url}[/red]"
            )
            return FetchResult.failure(
                "unexpected repository payload", status_code=response.status_code
            )

        return FetchResult.success(
            repos, status_code=response.status_code, next_link=next_link
        )

    async def fetch_issues(
        self, repository: RepositoryRecord
    ) -> FetchResult[RepositoryRecord]:
        """Get open issues of a repository and attach them to its record.

        The record is updated in place with ``issues`` and ``pullrequests``.

        Args:
            repository: Repository to enrich

        Returns:
            FetchResult holding the same, now enriched, record

        See https://docs.github.com/en/rest/issues/issues#list-repository-issues
        """
        params = {
            "state": "open",
            "sort": "created",
            "direction": "desc",
            "per_page": self.config.per_page,
            "page": self.config.page,
        }
        url = httpx.URL(
            f"{self.config.api_base}/repos/{repository.full_name}/issues",
            params=params,
        )

        response, error = await self._get(url, self.config.issues_media_type)
        if error is not None or response is None:
            status = response.status_code if response is not None else None
            return FetchResult.failure(error or "no response", status_code=status)

        next_link = self._report_response(url, response)
        issues = parse_json(response.content)

        try:
            self.output.save_issues(repository.short_name, issues)
        except OSError as e:
            error_console.print(
                f"[red]❌ Could not save issues of {repository.full_name}: {e}[/red]"
            )
            return FetchResult.failure(str(e), status_code=response.status_code)

        if not isinstance(issues, list):
            error_console.print(f"[red]❌ Expected a list of issues from {url}[/red]")
            return FetchResult.failure(
                "unexpected issues payload", status_code=response.status_code
            )

        repository.attach(split_issues_pull_requests(issues))
        return FetchResult.success(
            repository, status_code=response.status_code, next_link=next_link
        )
