"""Unit tests for GitHub activity aggregation.

Tests the pure folding logic with no HTTP involved:
- Language totals, percentages and top-8 truncation
- 30-day timeline construction and windowing
- Latest commit resolution (events first, repo commits as fallback)
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from app.services.github.aggregator import (
    ActivityAggregator,
    LatestCommitSource,
    commit_from_events,
    compute_language_stats,
    first_line,
    needs_commit_fallback,
    parse_timestamp,
    short_sha,
    timeline_dates,
    top_languages,
)
from app.services.github.types import GitHubRepo, RepoActivity
from tests.helpers.github_payloads import commit_json, local_iso, push_event_json

TODAY = date(2026, 1, 20)


def _repo(name: str = "repo1", owner: str = "octocat") -> GitHubRepo:
    return GitHubRepo(
        name=name,
        full_name=f"{owner}/{name}",
        html_url=f"https://github.com/{owner}/{name}",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Small helpers
# ═══════════════════════════════════════════════════════════════════════════


class TestCommitFormatting:
    def test_short_sha_truncates_to_seven(self):
        assert short_sha("abcdef1234567890") == "abcdef1"

    def test_short_sha_keeps_short_values(self):
        assert short_sha("abc12") == "abc12"
        assert short_sha("") == ""

    def test_first_line_of_multiline_message(self):
        assert first_line("Fix bug\n\nlonger body") == "Fix bug"

    def test_first_line_of_single_line_message(self):
        assert first_line("Initial commit") == "Initial commit"


# ═══════════════════════════════════════════════════════════════════════════
# Languages
# ═══════════════════════════════════════════════════════════════════════════


class TestLanguageStats:
    """Tests for percentage computation and truncation."""

    def test_percentages_sum_to_100(self):
        stats = compute_language_stats({"Python": 333, "Go": 333, "Rust": 334, "C": 1})

        assert sum(s.percentage for s in stats) == pytest.approx(100.0, abs=1e-6)

    def test_zero_total_returns_empty_list(self):
        assert compute_language_stats({}) == []
        assert compute_language_stats({"Python": 0}) == []

    def test_sorted_descending(self):
        stats = compute_language_stats({"Go": 10, "Python": 70, "Rust": 20})

        assert [s.language for s in stats] == ["Python", "Rust", "Go"]
        assert stats[0].percentage == pytest.approx(70.0)

    def test_ties_keep_first_seen_order(self):
        stats = compute_language_stats({"Go": 50, "Rust": 50})

        assert [s.language for s in stats] == ["Go", "Rust"]

    def test_top_languages_truncates_to_eight(self):
        language_bytes = {f"Lang{i}": 100 + i for i in range(12)}

        stats = top_languages(language_bytes)

        assert len(stats) == 8
        assert stats[0].language == "Lang11"
        percentages = [s.percentage for s in stats]
        assert percentages == sorted(percentages, reverse=True)

    def test_truncated_percentages_use_full_total(self):
        language_bytes = {f"Lang{i}": 10 for i in range(10)}

        stats = top_languages(language_bytes)

        assert all(s.percentage == pytest.approx(10.0) for s in stats)

    def test_known_language_gets_palette_color(self):
        stats = compute_language_stats({"Python": 1, "Brainfuck": 1})
        colors = {s.language: s.color for s in stats}

        assert colors["Python"] == "#3572A5"
        assert colors["Brainfuck"] == "#8b8b8b"

    def test_bytes_accumulate_across_repositories(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(RepoActivity(repo=_repo("a"), languages={"Python": 100, "Go": 50}))
        aggregator.add(RepoActivity(repo=_repo("b"), languages={"Python": 50}))

        assert aggregator.language_bytes == {"Python": 150, "Go": 50}
        metrics = aggregator.build_metrics(total_repos=2)
        assert metrics.languages[0].language == "Python"
        assert metrics.languages[0].bytes == 150
        assert metrics.languages[0].percentage == pytest.approx(75.0)


# ═══════════════════════════════════════════════════════════════════════════
# Timeline
# ═══════════════════════════════════════════════════════════════════════════


class TestTimeline:
    """Tests for the 30-day commit timeline."""

    def test_empty_timeline_has_thirty_contiguous_days(self):
        metrics = ActivityAggregator(today=TODAY).build_metrics(total_repos=0)
        buckets = metrics.commits_over_time

        assert len(buckets) == 30
        assert buckets[-1].date == "2026-01-20"
        assert buckets[0].date == "2025-12-22"
        assert all(b.count == 0 for b in buckets)
        for previous, current in zip(buckets, buckets[1:], strict=False):
            assert date.fromisoformat(current.date) - date.fromisoformat(previous.date) == (
                timedelta(days=1)
            )

    def test_timeline_dates_ascending_today_inclusive(self):
        dates = timeline_dates(TODAY)

        assert dates == sorted(dates)
        assert dates[-1] == TODAY.isoformat()

    def test_commits_counted_by_local_day(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo(),
                commits=[
                    commit_json("a" * 40, local_iso(TODAY, hour=9)),
                    commit_json("b" * 40, local_iso(TODAY, hour=18)),
                    commit_json("c" * 40, local_iso(TODAY - timedelta(days=3))),
                ],
            )
        )

        counts = {b.date: b.count for b in aggregator.build_metrics(1).commits_over_time}
        assert counts["2026-01-20"] == 2
        assert counts["2026-01-17"] == 1
        assert sum(counts.values()) == 3

    def test_old_commit_counts_in_total_but_not_timeline(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo(),
                commits=[commit_json("a" * 40, local_iso(TODAY - timedelta(days=35)))],
            )
        )

        metrics = aggregator.build_metrics(total_repos=1)
        assert metrics.total_commits == 1
        assert all(b.count == 0 for b in metrics.commits_over_time)

    def test_first_day_of_window_is_included(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo(),
                commits=[commit_json("a" * 40, local_iso(TODAY - timedelta(days=29)))],
            )
        )

        metrics = aggregator.build_metrics(total_repos=1)
        assert metrics.commits_over_time[0].count == 1

    def test_unparseable_date_counts_in_total_only(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(RepoActivity(repo=_repo(), commits=[commit_json("a" * 40, "not-a-date")]))

        metrics = aggregator.build_metrics(total_repos=1)
        assert metrics.total_commits == 1
        assert all(b.count == 0 for b in metrics.commits_over_time)
        assert aggregator.latest_repo_commit is None


# ═══════════════════════════════════════════════════════════════════════════
# Totals and partial failures
# ═══════════════════════════════════════════════════════════════════════════


class TestTotals:
    def test_total_commits_sums_page_lengths(self):
        aggregator = ActivityAggregator(today=TODAY)
        when = local_iso(TODAY)
        aggregator.add(RepoActivity(repo=_repo("a"), commits=[commit_json(str(i), when) for i in range(100)]))
        aggregator.add(RepoActivity(repo=_repo("b"), commits=[commit_json("x", when)]))

        assert aggregator.build_metrics(total_repos=2).total_commits == 101

    def test_failed_repository_contributes_nothing(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(RepoActivity(repo=_repo("broken"), errors=["languages", "commits"]))

        metrics = aggregator.build_metrics(total_repos=1)
        assert metrics.total_repos == 1
        assert metrics.total_commits == 0
        assert metrics.languages == ()


# ═══════════════════════════════════════════════════════════════════════════
# Latest commit
# ═══════════════════════════════════════════════════════════════════════════


class TestCommitFromEvents:
    """Tests for building the latest commit from the event stream."""

    def test_first_push_event_wins(self):
        events = [
            {"type": "WatchEvent", "repo": {"name": "octocat/starred"}},
            push_event_json("octocat/first", [{"sha": "1111111aaaa", "message": "First"}]),
            push_event_json("octocat/second", [{"sha": "2222222bbbb", "message": "Second"}]),
        ]

        commit = commit_from_events(events)

        assert commit is not None
        assert commit.repository.full_name == "octocat/first"
        assert commit.repository.name == "first"
        assert commit.repository.html_url == "https://github.com/octocat/first"
        assert commit.html_url == "https://github.com/octocat/first/commit/1111111aaaa"
        assert commit.sha == "1111111"

    def test_event_timestamp_is_commit_date(self):
        events = [
            push_event_json(
                "octocat/repo",
                [{"sha": "abcdef1234", "message": "x", "author": {"name": "A", "email": "a@x"}}],
                created_at="2026-01-05T10:00:00Z",
            )
        ]

        commit = commit_from_events(events)

        assert commit is not None
        assert commit.author.date == "2026-01-05T10:00:00Z"
        assert commit.author.name == "A"
        assert commit.author.email == "a@x"

    def test_missing_author_defaults(self):
        commit = commit_from_events([push_event_json("octocat/repo", [{"sha": "abc"}])])

        assert commit is not None
        assert commit.author.name == "Unknown"
        assert commit.author.email == ""
        assert commit.message == ""
        assert commit.sha == "abc"

    def test_push_event_without_commits_yields_nothing(self):
        assert commit_from_events([push_event_json("octocat/repo", [])]) is None

    def test_no_push_event_yields_nothing(self):
        assert commit_from_events([{"type": "IssuesEvent"}]) is None

    def test_no_events_yields_nothing(self):
        assert commit_from_events(None) is None
        assert commit_from_events([]) is None


class TestResolveLatestCommit:
    """Events take precedence over repository commits regardless of recency."""

    def _aggregator_with_later_repo_commit(self) -> ActivityAggregator:
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo("repo2", owner="user"),
                commits=[
                    commit_json(
                        "fedcba9876543",
                        "2026-01-15T12:00:00Z",
                        message="Later commit\nbody",
                        full_name="user/repo2",
                    )
                ],
            )
        )
        return aggregator

    def test_event_commit_preferred_over_later_repo_commit(self):
        events = [
            push_event_json(
                "user/repo1",
                [
                    {
                        "sha": "abcdef1234",
                        "message": "Fix bug\nlonger body",
                        "author": {"name": "A", "date": "2026-01-10T12:00:00Z"},
                    }
                ],
                created_at="2026-01-10T12:00:00Z",
            )
        ]

        commit, source = self._aggregator_with_later_repo_commit().resolve_latest_commit(events)

        assert source is LatestCommitSource.EVENTS
        assert commit is not None
        assert commit.sha == "abcdef1"
        assert commit.message == "Fix bug"
        assert commit.repository.full_name == "user/repo1"

    def test_falls_back_to_repo_commits_without_events(self):
        commit, source = self._aggregator_with_later_repo_commit().resolve_latest_commit(None)

        assert source is LatestCommitSource.REPO_COMMITS
        assert commit is not None
        assert commit.sha == "fedcba9"
        assert commit.message == "Later commit"
        assert commit.repository.full_name == "user/repo2"
        assert commit.html_url == "https://github.com/user/repo2/commit/fedcba9876543"

    def test_fallback_picks_max_timestamp_first_seen_on_tie(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo("a"),
                commits=[
                    commit_json("old0000", "2026-01-01T00:00:00Z"),
                    commit_json("tie1111", "2026-01-12T00:00:00Z"),
                ],
            )
        )
        aggregator.add(
            RepoActivity(repo=_repo("b"), commits=[commit_json("tie2222", "2026-01-12T00:00:00Z")])
        )

        commit, _ = aggregator.resolve_latest_commit([])

        assert commit is not None
        assert commit.sha == "tie1111"
        assert commit.repository.name == "a"

    def test_nothing_anywhere_yields_none(self):
        commit, source = ActivityAggregator(today=TODAY).resolve_latest_commit([])

        assert commit is None
        assert source is LatestCommitSource.REPO_COMMITS

    def test_fallback_predicate(self):
        assert needs_commit_fallback(None) is True
        event_commit = commit_from_events(
            [push_event_json("octocat/repo", [{"sha": "abcdef1234", "message": "m"}])]
        )
        assert needs_commit_fallback(event_commit) is False


class TestTimestampOffsets:
    """Commit dates with and without a UTC offset can be folded together."""

    def test_parse_without_offset_is_local_time(self):
        parsed = parse_timestamp("2026-01-19T11:00:00")

        assert parsed is not None
        assert parsed.tzinfo is not None
        assert parsed == datetime(2026, 1, 19, 11).astimezone()

    def test_parse_with_offset_keeps_offset(self):
        parsed = parse_timestamp("2026-01-19T10:00:00Z")

        assert parsed == datetime(2026, 1, 19, 10, tzinfo=UTC)

    def test_mixed_offsets_fold_without_error(self):
        naive_today = datetime(TODAY.year, TODAY.month, TODAY.day, 12).isoformat()
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(
            RepoActivity(
                repo=_repo(),
                commits=[
                    commit_json("aware00", local_iso(TODAY - timedelta(days=5))),
                    commit_json("naive11", naive_today),
                ],
            )
        )

        metrics = aggregator.build_metrics(total_repos=1)
        counts = {b.date: b.count for b in metrics.commits_over_time}
        assert metrics.total_commits == 2
        assert counts["2026-01-20"] == 1
        assert counts["2026-01-15"] == 1
        assert aggregator.latest_repo_commit is not None
        assert aggregator.latest_repo_commit.sha == "naive11"


class TestMetricsImmutability:
    def test_metrics_sequences_cannot_be_mutated(self):
        aggregator = ActivityAggregator(today=TODAY)
        aggregator.add(RepoActivity(repo=_repo(), languages={"Python": 10}))

        metrics = aggregator.build_metrics(total_repos=1)

        assert isinstance(metrics.languages, tuple)
        assert isinstance(metrics.commits_over_time, tuple)
        with pytest.raises(AttributeError):
            metrics.languages.append(metrics.languages[0])  # type: ignore[attr-defined]
