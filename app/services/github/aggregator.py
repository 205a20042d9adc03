"""
Aggregation of raw GitHub payloads into activity metrics.

Folds per-repository language maps and commit pages into:
- Language byte totals and percentage shares (top 8)
- A 30-day commit timeline keyed by local calendar date
- A total commit count (one page per repository, so capped at 100 each)
- The most recent commit, preferring the public event stream
"""

import logging
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from typing import Any

from app.services.github.constants import (
    DEFAULT_LANGUAGE_COLOR,
    GITHUB_LANGUAGE_COLORS,
    GITHUB_WEB_URL,
    PUSH_EVENT_TYPE,
    SHORT_SHA_LENGTH,
    TIMELINE_DAYS,
    TOP_LANGUAGES_LIMIT,
    UNKNOWN_AUTHOR,
)
from app.services.github.types import (
    CodeMetrics,
    CommitAuthor,
    CommitRepository,
    GitHubCommit,
    GitHubRepo,
    LanguageStat,
    RepoActivity,
    TimelineBucket,
)

logger = logging.getLogger(__name__)


class LatestCommitSource(str, Enum):
    """Where the latest commit was resolved from."""

    EVENTS = "events"  # All branches
    REPO_COMMITS = "repo_commits"  # Default branches only


def short_sha(sha: str) -> str:
    """Truncate a commit hash to 7 characters when long enough."""
    return sha[:SHORT_SHA_LENGTH] if len(sha) >= SHORT_SHA_LENGTH else sha


def first_line(message: str) -> str:
    """Return the summary line of a commit message."""
    return message.split("\n")[0]


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse a GitHub ISO 8601 timestamp, or None if missing or malformed.

    A timestamp without an offset is read as local time.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.astimezone()
    return parsed


def local_date_key(moment: datetime) -> str:
    """Format the local calendar date of an instant as YYYY-MM-DD."""
    return moment.astimezone().strftime("%Y-%m-%d")


# ─────────────────────────────────────────────────────────────────────────────
# Latest commit
# ─────────────────────────────────────────────────────────────────────────────


def commit_from_events(events: list[dict[str, Any]] | None) -> GitHubCommit | None:
    """
    Build the latest commit from the user's event stream.

    Only the first PushEvent is considered. Its first commit is taken and the
    event's repository and timestamp are used as authority.

    Returns:
        GitHubCommit, or None if there is no push event or it has no commits
    """
    if not events:
        return None

    push_event = next((e for e in events if e.get("type") == PUSH_EVENT_TYPE), None)
    if push_event is None:
        return None

    commits = (push_event.get("payload") or {}).get("commits") or []
    if not commits:
        return None

    repo_name: str = (push_event.get("repo") or {}).get("name") or ""
    raw = commits[0]
    sha = raw.get("sha") if isinstance(raw.get("sha"), str) else ""
    author = raw.get("author") or {}

    return GitHubCommit(
        sha=short_sha(sha),
        message=first_line(raw.get("message") or ""),
        author=CommitAuthor(
            name=author.get("name") or UNKNOWN_AUTHOR,
            email=author.get("email") or "",
            date=push_event.get("created_at") or datetime.now(UTC).isoformat(),
        ),
        html_url=f"{GITHUB_WEB_URL}/{repo_name}/commit/{sha}",
        repository=CommitRepository(
            name=repo_name.split("/")[-1],
            full_name=repo_name,
            html_url=f"{GITHUB_WEB_URL}/{repo_name}",
        ),
    )


def commit_from_repo_commit(raw: dict[str, Any], repo: GitHubRepo) -> GitHubCommit:
    """Build a GitHubCommit from a repository commit listing entry."""
    author = (raw.get("commit") or {}).get("author") or {}
    return GitHubCommit(
        sha=short_sha(raw.get("sha") or ""),
        message=first_line((raw.get("commit") or {}).get("message") or ""),
        author=CommitAuthor(
            name=author.get("name") or UNKNOWN_AUTHOR,
            email=author.get("email") or "",
            date=author.get("date") or "",
        ),
        html_url=raw.get("html_url") or "",
        repository=CommitRepository(
            name=repo.name,
            full_name=repo.full_name,
            html_url=repo.html_url,
        ),
    )


def needs_commit_fallback(candidate: GitHubCommit | None) -> bool:
    """
    Check if the event stream failed to produce a latest commit.

    True when events were unavailable, contained no push event, or the push
    event carried no commits. In every case the repository commits are used.
    """
    return candidate is None


# ─────────────────────────────────────────────────────────────────────────────
# Languages and timeline
# ─────────────────────────────────────────────────────────────────────────────


def compute_language_stats(language_bytes: dict[str, int]) -> list[LanguageStat]:
    """
    Convert accumulated byte counts to percentage shares.

    Returns every language (untruncated) sorted by percentage descending.
    Ties keep their first-seen order. Empty when the byte total is 0.
    """
    total_bytes = sum(language_bytes.values())
    if total_bytes == 0:
        return []

    languages = [
        LanguageStat(
            language=name,
            bytes=byte_count,
            percentage=(byte_count / total_bytes) * 100,
            color=GITHUB_LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR),
        )
        for name, byte_count in language_bytes.items()
    ]

    languages.sort(key=lambda x: x.percentage, reverse=True)
    return languages


def top_languages(
    language_bytes: dict[str, int],
    limit: int = TOP_LANGUAGES_LIMIT,
) -> tuple[LanguageStat, ...]:
    """Top languages by share of total bytes."""
    return tuple(compute_language_stats(language_bytes)[:limit])


def timeline_dates(today: date, days: int = TIMELINE_DAYS) -> list[str]:
    """Calendar dates of the trailing window, oldest first, today inclusive."""
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def build_timeline(counts: dict[str, int], today: date) -> tuple[TimelineBucket, ...]:
    """Zero-filled timeline buckets for the trailing window."""
    return tuple(TimelineBucket(date=day, count=counts.get(day, 0)) for day in timeline_dates(today))


# ─────────────────────────────────────────────────────────────────────────────
# Fold
# ─────────────────────────────────────────────────────────────────────────────


class ActivityAggregator:
    """
    Accumulates per-repository activity into metrics.

    Every operation only adds counts or tracks a maximum, so repositories
    may be added in any order. The only order-sensitive detail is the
    latest-commit tie-break, where the first commit seen wins.
    """

    def __init__(self, today: date | None = None):
        self.today = today or date.today()
        self.total_commits = 0
        self._language_bytes: dict[str, int] = {}
        self._window = set(timeline_dates(self.today))
        self._day_counts: dict[str, int] = {}
        self._latest_commit: GitHubCommit | None = None
        self._latest_date: datetime | None = None

    @property
    def language_bytes(self) -> dict[str, int]:
        return dict(self._language_bytes)

    @property
    def latest_repo_commit(self) -> GitHubCommit | None:
        """Most recent default-branch commit seen so far."""
        return self._latest_commit

    def add(self, activity: RepoActivity) -> None:
        """Fold one repository's languages and commits into the totals."""
        if activity.languages:
            for language, byte_count in activity.languages.items():
                self._language_bytes[language] = self._language_bytes.get(language, 0) + byte_count

        if activity.commits is None:
            return

        self.total_commits += len(activity.commits)
        for raw in activity.commits:
            self._add_commit(raw, activity.repo)

    def _add_commit(self, raw: dict[str, Any], repo: GitHubRepo) -> None:
        author_date = parse_timestamp(
            ((raw.get("commit") or {}).get("author") or {}).get("date")
        )
        if author_date is None:
            logger.debug(f"Skipping commit without author date in {repo.full_name}")
            return

        day = local_date_key(author_date)
        if day in self._window:
            self._day_counts[day] = self._day_counts.get(day, 0) + 1

        if self._latest_date is None or author_date > self._latest_date:
            self._latest_date = author_date
            self._latest_commit = commit_from_repo_commit(raw, repo)

    def resolve_latest_commit(
        self,
        events: list[dict[str, Any]] | None,
    ) -> tuple[GitHubCommit | None, LatestCommitSource]:
        """
        Pick the latest commit: the event stream first, repository commits second.

        The event stream wins regardless of recency because it sees every branch.
        """
        candidate = commit_from_events(events)
        if not needs_commit_fallback(candidate):
            return candidate, LatestCommitSource.EVENTS
        return self._latest_commit, LatestCommitSource.REPO_COMMITS

    def build_metrics(self, total_repos: int) -> CodeMetrics:
        """Produce the final metrics snapshot."""
        return CodeMetrics(
            total_commits=self.total_commits,
            total_repos=total_repos,
            languages=top_languages(self._language_bytes),
            commits_over_time=build_timeline(self._day_counts, self.today),
        )
