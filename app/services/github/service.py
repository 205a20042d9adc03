"""
GitHub activity service.

Facade that wires the fetch, aggregation and cache steps together:
- get_github_data: cached pipeline (main entry point)
- fetch_github_data: uncached pipeline
- get_latest_commit / get_code_metrics: narrow views of the cached data
"""

import logging
from datetime import date
from typing import Any

import httpx

from app.services.github.aggregator import ActivityAggregator
from app.services.github.cache import GitHubDataCache, github_data_cache
from app.services.github.exceptions import GitHubAPIError, GitHubRateLimitError
from app.services.github.read_operations import DEFAULT_USER_AGENT, GitHubReadOperations
from app.services.github.types import CodeMetrics, GitHubCommit, GitHubData

logger = logging.getLogger(__name__)


class GitHubActivityService:
    """Aggregates a GitHub user's public activity into metrics."""

    def __init__(
        self,
        token: str | None = None,
        cache: GitHubDataCache | None = None,
        max_concurrent: int = 1,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._reader = GitHubReadOperations(token, user_agent=user_agent)
        self._cache = cache if cache is not None else github_data_cache
        self._max_concurrent = max_concurrent

    async def get_github_data(self, username: str) -> GitHubData | None:
        """
        Get aggregated data for a user, served from cache while fresh.

        Returns:
            GitHubData, or None if the repository listing could not be fetched
        """
        return await self._cache.get_or_fetch(username, self.fetch_github_data)

    async def fetch_github_data(
        self,
        username: str,
        today: date | None = None,
    ) -> GitHubData | None:
        """
        Run the full fetch-and-aggregate pipeline without the cache.

        Only the repository listing is fatal. Event and per-repository
        failures degrade the result instead of aborting it.
        """
        try:
            repos = await self._reader.get_user_repos(username)
        except GitHubRateLimitError as e:
            reset = f" (resets at {e.rate_limit_reset})" if e.rate_limit_reset else ""
            logger.error(f"GitHub API rate limit exceeded{reset}")
            return None
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch GitHub repositories for {username}: {e}")
            return None

        events = await self._get_events(username)

        activities = await self._reader.get_repos_activity(repos, self._max_concurrent)

        aggregator = ActivityAggregator(today=today)
        failed_calls = 0
        for activity in activities:
            aggregator.add(activity)
            failed_calls += len(activity.errors)

        latest_commit, source = aggregator.resolve_latest_commit(events)
        metrics = aggregator.build_metrics(total_repos=len(repos))

        logger.info(
            f"Aggregated GitHub data for {username} ({len(repos)} repos, "
            f"{metrics.total_commits} commits, {failed_calls} failed repo calls, "
            f"latest commit from {source.value})"
        )
        return GitHubData(latest_commit=latest_commit, metrics=metrics)

    async def _get_events(self, username: str) -> list[dict[str, Any]] | None:
        try:
            return await self._reader.get_user_events(username)
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.debug(f"Events unavailable for {username}, using repo commits: {e}")
            return None

    async def get_latest_commit(self, username: str) -> GitHubCommit | None:
        data = await self.get_github_data(username)
        return data.latest_commit if data else None

    async def get_code_metrics(self, username: str) -> CodeMetrics | None:
        data = await self.get_github_data(username)
        return data.metrics if data else None
