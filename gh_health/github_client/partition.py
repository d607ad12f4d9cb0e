"""Split issue lists into issues and pull requests."""

from collections.abc import Iterable
from typing import Any

from .models import IssuePartition


def is_pull_request(item: Any) -> bool:
    """The issues endpoint marks pull requests with a `pull_request` object.

    Any non-null marker counts, including an empty object. Entries that are
    not objects are kept as issues.
    """
    return isinstance(item, dict) and item.get("pull_request") is not None


def split_issues_pull_requests(items: Iterable[Any]) -> IssuePartition:
    """Separate an issues API response into issues and pull requests.

    Args:
        items: Issue-like records as returned by the issues endpoint

    Returns:
        IssuePartition with both lists in their original relative order
    """
    partition = IssuePartition()
    for item in items:
        if is_pull_request(item):
            partition.pullrequests.append(item)
        else:
            partition.issues.append(item)
    return partition
