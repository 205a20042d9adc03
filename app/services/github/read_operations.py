"""
GitHub API read operations.

Provides the read-only calls needed to aggregate a user's activity:
- Public repositories (most recently updated first)
- Public events
- Per-repository language breakdown
- Per-repository default-branch commits
"""

import asyncio
import logging
from typing import Any

import httpx

from app.services.github.constants import (
    COMMITS_PER_PAGE,
    EVENTS_PER_PAGE,
    GITHUB_ACCEPT_HEADER,
    GITHUB_API_URL,
    REPOS_PER_PAGE,
)
from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import get_github_client
from app.services.github.types import GitHubRepo, RepoActivity

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "github-activity-api"


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Uses a shared HTTP client singleton for connection pooling. The token is
    optional; without it GitHub applies the unauthenticated rate limit.
    """

    BASE_URL = GITHUB_API_URL

    def __init__(self, token: str | None = None, user_agent: str = DEFAULT_USER_AGENT):
        self.token = token
        self._headers = {
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": user_agent,
        }
        if token:
            self._headers["Authorization"] = f"token {token}"

    def _normalize_repo(self, data: dict[str, Any]) -> GitHubRepo:
        """Convert GitHub API response to GitHubRepo dataclass."""
        return GitHubRepo(
            name=data["name"],
            full_name=data["full_name"],
            html_url=data["html_url"],
        )

    async def _get_json(
        self,
        path: str,
        resource: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}{path}",
            headers=self._headers,
            params=params,
        )
        handle_error_response(response, resource)
        return response.json()

    async def get_user_repos(self, username: str) -> list[GitHubRepo]:
        """
        Fetch a single page of public repositories for a user.

        Args:
            username: GitHub login

        Returns:
            Up to 100 repositories, most recently updated first

        Raises:
            GitHubRateLimitError: On 403
            GitHubAPIError: On any other non-2xx response
        """
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/users/{username}/repos",
            headers=self._headers,
            params={"sort": "updated", "per_page": REPOS_PER_PAGE},
        )

        handle_error_response(response, f"users/{username}/repos")

        rate_info = RateLimitInfo(response)
        if rate_info.remaining is not None:
            logger.debug(f"GitHub rate limit remaining: {rate_info.remaining}")

        data: list[dict[str, Any]] = response.json()
        return [self._normalize_repo(r) for r in data]

    async def get_user_events(self, username: str) -> list[dict[str, Any]]:
        """
        Fetch the user's most recent public events.

        Unlike repository commit listings, events cover pushes to every branch.
        """
        events: list[dict[str, Any]] = await self._get_json(
            f"/users/{username}/events",
            f"users/{username}/events",
            params={"per_page": EVENTS_PER_PAGE},
        )
        return events

    async def get_repo_languages(self, full_name: str) -> dict[str, int]:
        """
        Fetch language breakdown for a repository.

        Args:
            full_name: Repository in owner/repo form

        Returns:
            Mapping of language name to byte count
        """
        languages: dict[str, int] = await self._get_json(
            f"/repos/{full_name}/languages",
            full_name,
        )
        return languages

    async def get_repo_commits(self, full_name: str) -> list[dict[str, Any]]:
        """
        Fetch one page of commits on the repository's default branch.

        Capped at 100 commits; older history is not followed.
        """
        commits: list[dict[str, Any]] = await self._get_json(
            f"/repos/{full_name}/commits",
            full_name,
            params={"per_page": COMMITS_PER_PAGE},
        )
        return commits

    async def get_repo_activity(self, repo: GitHubRepo) -> RepoActivity:
        """
        Fetch languages and commits for one repository.

        A failing call is logged and recorded in errors; the other call
        still runs.
        """
        activity = RepoActivity(repo=repo)

        try:
            activity.languages = await self.get_repo_languages(repo.full_name)
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to get languages for {repo.full_name}: {e}")
            activity.errors.append(f"Failed to get languages: {e}")

        try:
            activity.commits = await self.get_repo_commits(repo.full_name)
        except (GitHubAPIError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to get commits for {repo.full_name}: {e}")
            activity.errors.append(f"Failed to get commits: {e}")

        return activity

    async def get_repos_activity(
        self,
        repos: list[GitHubRepo],
        max_concurrent: int = 1,
    ) -> list[RepoActivity]:
        """
        Fetch activity for each repository.

        Args:
            repos: Repositories in listing order
            max_concurrent: Maximum repositories fetched at once (default: 1)

        Returns:
            One RepoActivity per repository, in the same order as repos
        """
        if not repos:
            return []

        semaphore = asyncio.Semaphore(max(1, max_concurrent))

        async def fetch_with_limit(repo: GitHubRepo) -> RepoActivity:
            async with semaphore:
                return await self.get_repo_activity(repo)

        tasks = [fetch_with_limit(repo) for repo in repos]
        return list(await asyncio.gather(*tasks))
