"""Fixtures for API route tests."""

import pytest

from api.dependencies.rate_limits import get_limiter


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Rate limit counters are process-wide; start every test from zero."""
    get_limiter().reset()
    yield
    get_limiter().reset()


@pytest.fixture
def actor_headers():
    return {"X-Actor-Id": "acct-1"}
