"""Data types for GitHub activity data."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data."""

    name: str
    full_name: str  # owner/repo
    html_url: str


@dataclass(frozen=True)
class CommitAuthor:
    """Author of a commit."""

    name: str
    email: str
    date: str  # ISO 8601


@dataclass(frozen=True)
class CommitRepository:
    """Repository a commit belongs to."""

    name: str
    full_name: str
    html_url: str


@dataclass(frozen=True)
class GitHubCommit:
    """The most recent commit across a user's activity."""

    sha: str  # Short hash (7 chars)
    message: str  # First line only
    author: CommitAuthor
    html_url: str
    repository: CommitRepository


@dataclass(frozen=True)
class LanguageStat:
    """Language share across all of a user's repositories."""

    language: str
    bytes: int
    percentage: float  # 0-100
    color: str  # Hex color for display


@dataclass(frozen=True)
class TimelineBucket:
    """Commit count for one local calendar day."""

    date: str  # YYYY-MM-DD
    count: int


@dataclass(frozen=True)
class CodeMetrics:
    """Aggregated code metrics for a user."""

    total_commits: int
    total_repos: int
    languages: tuple[LanguageStat, ...]
    commits_over_time: tuple[TimelineBucket, ...]


@dataclass(frozen=True)
class GitHubData:
    """Everything aggregated for one user in one fetch."""

    latest_commit: GitHubCommit | None
    metrics: CodeMetrics


@dataclass
class RepoActivity:
    """Raw per-repository data gathered for aggregation.

    languages/commits are None when that call failed.
    """

    repo: GitHubRepo
    languages: dict[str, int] | None = None
    commits: list[dict[str, Any]] | None = None
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CacheEntry:
    """Cached aggregation result and the instant it was produced."""

    data: GitHubData
    fetched_at: datetime
