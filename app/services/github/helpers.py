"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import logging

import httpx

from app.services.github.exceptions import GitHubAPIError, GitHubRateLimitError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def remaining_count(self) -> int | None:
        """Get remaining request quota as integer, or None if not available."""
        return int(self.remaining) if self.remaining else None

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Handle common error responses from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: What was requested, for error context (e.g. "owner/repo")

    Raises:
        GitHubRateLimitError: On any 403
        GitHubAPIError: For authentication, missing resources, or other API errors
    """
    if response.is_success:
        return

    if response.status_code == 403:
        rate_info = RateLimitInfo(response)
        raise GitHubRateLimitError(resource, rate_limit_reset=rate_info.reset_timestamp)
    elif response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Resource not found: {resource}", 404)
    raise GitHubAPIError(f"GitHub API error: {response.status_code}", response.status_code)
