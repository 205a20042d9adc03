"""Root conftest — shared test infrastructure.

Provides:
- Autouse cache reset so cached aggregation results never leak between tests
"""

from __future__ import annotations

import pytest

from app.services.github.cache import clear_all_caches


@pytest.fixture(autouse=True)
def _clear_github_caches():
    """Clear the GitHub data cache before and after each test."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio, the only event loop the app targets."""
    return "asyncio"
