"""
TTL caching for aggregated GitHub data.

Aggregating one user costs two requests per repository, so the result is kept
in memory for a short window (3 minutes by default) keyed by username.

Concurrent requests for the same username during a miss share a single
in-flight fetch instead of each running the whole pipeline.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from cachetools import TTLCache  # type: ignore[import-untyped]

from app.config import settings
from app.services.github.types import CacheEntry, GitHubData

logger = logging.getLogger(__name__)

FetchFunc = Callable[[str], Awaitable[GitHubData | None]]


class GitHubDataCache:
    """
    Username-keyed memo of aggregation results.

    Only successful results are stored. A failed fetch (None or an exception)
    leaves the cache as it was and is reported to the waiting callers only.
    """

    def __init__(
        self,
        ttl_seconds: float = 180,
        maxsize: int = 32,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._entries: TTLCache[str, CacheEntry] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, timer=timer
        )
        self._inflight: dict[str, asyncio.Task[GitHubData | None]] = {}

    def get(self, username: str) -> CacheEntry | None:
        """Return the fresh entry for a username, if any."""
        entry: CacheEntry | None = self._entries.get(username)
        return entry

    def set(self, username: str, data: GitHubData) -> None:
        """Store data for a username, replacing any previous entry."""
        self._entries[username] = CacheEntry(data=data, fetched_at=datetime.now(UTC))

    async def get_or_fetch(self, username: str, fetch: FetchFunc) -> GitHubData | None:
        """
        Return cached data for a username, fetching it on a miss.

        Args:
            username: Cache key
            fetch: Coroutine function producing fresh data (None on failure)

        Returns:
            Cached or freshly fetched data, or None if the fetch failed
        """
        entry = self.get(username)
        if entry is not None:
            logger.info(f"Using cached GitHub data for {username}")
            return entry.data

        task = self._inflight.get(username)
        if task is None:
            logger.debug(f"Cache MISS: {username}")
            task = asyncio.ensure_future(self._fetch_and_store(username, fetch))
            self._inflight[username] = task
        else:
            logger.debug(f"Joining in-flight fetch for {username}")

        # A cancelled waiter must not cancel the fetch other callers share
        return await asyncio.shield(task)

    async def _fetch_and_store(self, username: str, fetch: FetchFunc) -> GitHubData | None:
        try:
            data = await fetch(username)
            if data is not None:
                self.set(username, data)
            return data
        finally:
            self._inflight.pop(username, None)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> dict[str, int]:
        return {
            "size": len(self._entries),
            "maxsize": int(self._entries.maxsize),
            "inflight": len(self._inflight),
        }


github_data_cache = GitHubDataCache(
    ttl_seconds=settings.github_cache_ttl_seconds,
    maxsize=settings.github_cache_maxsize,
)


def clear_all_caches() -> None:
    """Clear all GitHub caches. Useful for testing or when data is known to be stale."""
    github_data_cache.clear()
    logger.debug("Cleared all GitHub caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache statistics for monitoring."""
    return {"github_data": github_data_cache.stats()}
