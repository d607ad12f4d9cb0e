"""GitHub client package for API interaction."""

from .client import GitHubRestClient
from .decoding import parse_json
from .models import FetchResult, IssuePartition, RepositoryRecord, RunReport
from .partition import is_pull_request, split_issues_pull_requests

__all__ = [
    "GitHubRestClient",
    "FetchResult",
    "IssuePartition",
    "RepositoryRecord",
    "RunReport",
    "is_pull_request",
    "parse_json",
    "split_issues_pull_requests",
]
