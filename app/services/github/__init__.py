"""
GitHub activity service package.

Re-exports all public types and classes.
Usage: `from app.services.github import GitHubActivityService, CodeMetrics`

Module structure:
- service.py: Main GitHubActivityService facade
- read_operations.py: Read-only API calls (repos, events, languages, commits)
- aggregator.py: Folding raw payloads into metrics and the latest commit
- cache.py: Username-keyed TTL cache with in-flight fetch sharing
- helpers.py: Rate limit handling and error utilities
- types.py: Data types
- exceptions.py: Custom exceptions
- constants.py: API constants and configuration
"""

from app.services.github.aggregator import (
    ActivityAggregator,
    LatestCommitSource,
    needs_commit_fallback,
)
from app.services.github.cache import GitHubDataCache, github_data_cache
from app.services.github.cache import clear_all_caches as clear_github_caches
from app.services.github.cache import get_cache_stats as get_github_cache_stats
from app.services.github.constants import GITHUB_LANGUAGE_COLORS
from app.services.github.exceptions import GitHubAPIError, GitHubRateLimitError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.service import GitHubActivityService
from app.services.github.types import (
    CodeMetrics,
    CommitAuthor,
    CommitRepository,
    GitHubCommit,
    GitHubData,
    GitHubRepo,
    LanguageStat,
    RepoActivity,
    TimelineBucket,
)

__all__ = [
    # Service (main entry point)
    "GitHubActivityService",
    # Building blocks (for direct use if needed)
    "GitHubReadOperations",
    "ActivityAggregator",
    "LatestCommitSource",
    "needs_commit_fallback",
    "GitHubDataCache",
    "github_data_cache",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubRateLimitError",
    # Types
    "CodeMetrics",
    "CommitAuthor",
    "CommitRepository",
    "GitHubCommit",
    "GitHubData",
    "GitHubRepo",
    "LanguageStat",
    "RepoActivity",
    "TimelineBucket",
    # Constants
    "GITHUB_LANGUAGE_COLORS",
]
