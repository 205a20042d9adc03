"""API test fixtures — HTTP client with the GitHub service mocked out.

The activity service is replaced through FastAPI dependency overrides, so no
request ever reaches GitHub.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings


@pytest.fixture
def github_username(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure the identity the endpoints report on."""
    monkeypatch.setattr(settings, "github_username", "octocat")
    return "octocat"


@pytest.fixture
def mock_github_service() -> MagicMock:
    """Stand-in for GitHubActivityService with async read methods."""
    service = MagicMock()
    service.get_latest_commit = AsyncMock(return_value=None)
    service.get_code_metrics = AsyncMock(return_value=None)
    return service


@pytest.fixture
async def api_client(mock_github_service: MagicMock):
    """HTTP client against the app with the GitHub service overridden."""
    from app.api.deps import get_github_service
    from app.main import app

    app.dependency_overrides[get_github_service] = lambda: mock_github_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
