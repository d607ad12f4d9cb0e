"""Data models for repositories, issue lists and fetch outcomes.

Repository and issue objects come straight from the GitHub REST API.
API Reference: https://docs.github.com/en/rest/repos/repos#list-repositories-for-a-user
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

T = TypeVar("T")


class IssuePartition(BaseModel):
    """Open issues and pull requests of one repository, in API order."""

    issues: list[Any] = Field(
        default_factory=list, description="Issue-like records without a PR marker"
    )
    pullrequests: list[Any] = Field(
        default_factory=list, description="Issue-like records with a PR marker"
    )


class RepositoryRecord(BaseModel):
    """A repository as returned by the API, optionally enriched with issues.

    Every field of the API object is kept so the record can be written back
    out verbatim.
    """

    model_config = ConfigDict(extra="allow")

    full_name: str = Field(..., description="owner/name of the repository")
    name: str | None = Field(None, description="Repository name without owner")
    issues: list[Any] | None = Field(
        None, description="Open issues, attached after the issue fetch"
    )
    pullrequests: list[Any] | None = Field(
        None, description="Open pull requests, attached after the issue fetch"
    )
    _key_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: Any) -> "RepositoryRecord":
        record = handler(data)
        if isinstance(data, dict):
            record._key_order = list(data)
        return record

    @property
    def short_name(self) -> str:
        return self.name or self.full_name.split("/")[-1]

    def attach(self, partition: IssuePartition) -> "RepositoryRecord":
        """Attach partitioned issues to this record in place."""
        self.issues = partition.issues
        self.pullrequests = partition.pullrequests
        return self

    def to_json(self) -> dict[str, Any]:
        """The API object as received, plus any attached issue lists."""
        data = self.model_dump(mode="json", exclude_unset=True)
        ordered = {key: data.pop(key) for key in self._key_order if key in data}
        ordered.update(data)
        return ordered


@dataclass
class FetchResult(Generic[T]):
    """Outcome of one API call: a value, or the reason there is none."""

    value: T | None = None
    error: str | None = None
    status_code: int | None = None
    next_link: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        value: T,
        status_code: int | None = None,
        next_link: str | None = None,
    ) -> "FetchResult[T]":
        return cls(value=value, status_code=status_code, next_link=next_link)

    @classmethod
    def failure(cls, error: str, status_code: int | None = None) -> "FetchResult[T]":
        return cls(error=error, status_code=status_code)


class RunReport(BaseModel):
    """What a collection run fetched and where the aggregate went."""

    username: str
    repositories_stage_failed: bool = False
    repository_count: int = 0
    enriched_count: int = 0
    failed_repositories: list[str] = Field(default_factory=list)
    aggregate_path: Path | None = None
