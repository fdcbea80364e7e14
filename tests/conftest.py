"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
HTTP client fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
# Tests start from an empty store unless they seed explicitly
os.environ.setdefault("SEED_ON_STARTUP", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from datetime import UTC, datetime

import pytest

from src.portfolio.core.config import get_settings
from src.portfolio.repositories import ProjectStore
from tests.helpers import FakeClock

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# --- Store Fixtures ---


@pytest.fixture
def clock() -> FakeClock:
    """A controllable clock starting at 2024-05-01 12:00 UTC."""
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store(clock: FakeClock) -> ProjectStore:
    """An empty project store driven by the fake clock."""
    return ProjectStore(clock=clock)
