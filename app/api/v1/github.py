"""
GitHub activity endpoints for the configured identity.

Both endpoints always answer 200 with a tagged result:
{"success": true, "data": ...} or {"success": false, "error": "..."}.
Error text is sanitized before it leaves the API.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.deps import GitHubServiceDep, get_github_username
from app.core.security import sanitize_error_message
from app.services.github import CodeMetrics, GitHubCommit

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)

COMMIT_FETCH_FAILED = "Failed to fetch commit data"
METRICS_FETCH_FAILED = "Failed to fetch metrics data"
METRICS_NOT_FOUND = "No metrics data found"


# --- Response Models ---


class CommitAuthorOut(BaseModel):
    name: str
    email: str
    date: str


class CommitRepositoryOut(BaseModel):
    name: str
    full_name: str
    html_url: str


class LatestCommitOut(BaseModel):
    """Most recent commit across the user's activity."""

    sha: str
    message: str
    author: CommitAuthorOut
    html_url: str
    repository: CommitRepositoryOut


class LanguageStatOut(BaseModel):
    language: str
    bytes: int
    percentage: float
    color: str


class TimelineBucketOut(BaseModel):
    date: str
    count: int


class CodeMetricsOut(BaseModel):
    """Aggregated code metrics."""

    total_commits: int
    total_repos: int
    languages: list[LanguageStatOut]
    commits_over_time: list[TimelineBucketOut]


class LatestCommitResult(BaseModel):
    success: bool
    data: LatestCommitOut | None = None
    error: str | None = None


class CodeMetricsResult(BaseModel):
    success: bool
    data: CodeMetricsOut | None = None
    error: str | None = None


def _commit_out(commit: GitHubCommit | None) -> LatestCommitOut | None:
    if commit is None:
        return None
    return LatestCommitOut.model_validate(asdict(commit))


def _metrics_out(metrics: CodeMetrics) -> CodeMetricsOut:
    return CodeMetricsOut.model_validate(asdict(metrics))


# --- Endpoints ---


@router.get("/latest-commit", response_model=LatestCommitResult)
async def fetch_latest_commit(github: GitHubServiceDep) -> LatestCommitResult:
    """
    Latest commit for the configured identity.

    Succeeds with null data when GitHub could not be reached.
    """
    try:
        commit = await github.get_latest_commit(get_github_username())
        return LatestCommitResult(success=True, data=_commit_out(commit))
    except Exception as e:
        logger.error(f"Error in fetch_latest_commit: {e}")
        return LatestCommitResult(
            success=False,
            error=sanitize_error_message(str(e), COMMIT_FETCH_FAILED),
        )


@router.get("/metrics", response_model=CodeMetricsResult)
async def fetch_code_metrics(github: GitHubServiceDep) -> CodeMetricsResult:
    """Code metrics for the configured identity."""
    try:
        metrics = await github.get_code_metrics(get_github_username())
        if metrics is None:
            return CodeMetricsResult(success=False, error=METRICS_NOT_FOUND)
        return CodeMetricsResult(success=True, data=_metrics_out(metrics))
    except Exception as e:
        logger.error(f"Error in fetch_code_metrics: {e}")
        return CodeMetricsResult(
            success=False,
            error=sanitize_error_message(str(e), METRICS_FETCH_FAILED),
        )
