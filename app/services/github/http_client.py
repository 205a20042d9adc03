"""
Shared HTTP client for GitHub API operations.

Provides a singleton AsyncClient with connection pooling for all GitHub API calls.
An aggregation issues up to two requests per repository, so reusing connections
avoids paying the TLS handshake on every one of them.
"""

import logging

import httpx

from app.config import settings
from app.services.github.helpers import RateLimitInfo

logger = logging.getLogger(__name__)

# Warn once the remaining hourly quota drops to this many requests
LOW_RATE_LIMIT_THRESHOLD = 10

# Module-level singleton client
_client: httpx.AsyncClient | None = None


async def _warn_on_low_rate_limit(response: httpx.Response) -> None:
    remaining = RateLimitInfo(response).remaining_count
    if remaining is not None and remaining <= LOW_RATE_LIMIT_THRESHOLD:
        logger.warning(f"GitHub rate limit nearly exhausted: {remaining} requests left")


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Auth headers are passed per-request, not stored on the client.

    Returns:
        Shared httpx.AsyncClient configured for GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.github_request_timeout_seconds,
                connect=settings.github_connect_timeout_seconds,
            ),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            http2=True,
            event_hooks={"response": [_warn_on_low_rate_limit]},
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_github_client() -> None:
    """
    Close the shared HTTP client.

    Call on app shutdown for graceful termination.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
