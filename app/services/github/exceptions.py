"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubRateLimitError(GitHubAPIError):
    """GitHub answered 403 on a request.

    Unauthenticated clients mostly see 403 once the hourly quota is spent,
    so every 403 is treated as a rate limit. The reset timestamp is only
    known when GitHub sent the X-RateLimit-Reset header.
    """

    def __init__(self, resource: str, rate_limit_reset: int | None = None):
        self.resource = resource
        super().__init__(
            "GitHub API rate limit exceeded",
            403,
            rate_limit_reset=rate_limit_reset,
        )
