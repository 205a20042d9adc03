"""GitHub activity dependencies."""

from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.core.exceptions import ConfigurationError
from app.services.github import GitHubActivityService


def get_github_username() -> str:
    """
    Resolve the configured identity.

    Raises:
        ConfigurationError: If GITHUB_USERNAME is not set
    """
    username = settings.github_username.strip()
    if not username:
        raise ConfigurationError("GITHUB_USERNAME")
    return username


def get_github_service() -> GitHubActivityService:
    """Build the activity service from settings (the data cache is process-wide)."""
    return GitHubActivityService(
        token=settings.github_token or None,
        max_concurrent=settings.github_max_concurrency,
        user_agent=settings.github_user_agent,
    )


GitHubServiceDep = Annotated[GitHubActivityService, Depends(get_github_service)]
