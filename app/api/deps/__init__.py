"""API dependencies - re-exports from submodules."""

from .github import GitHubServiceDep, get_github_service, get_github_username

__all__ = [
    "GitHubServiceDep",
    "get_github_service",
    "get_github_username",
]
