"""Integration test fixtures for HTTP client operations.

Each test gets its own application and store, so no state leaks between tests.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.portfolio.core.config import Settings
from src.portfolio.main import create_app
from src.portfolio.repositories import ProjectStore


@pytest.fixture
def settings() -> Settings:
    """Testing settings with startup seeding disabled."""
    return Settings(app_env="testing", seed_on_startup=False)


@pytest.fixture
def client(settings: Settings, store: ProjectStore) -> Generator[TestClient]:
    """Test client fixture serving the shared ``store`` fixture."""
    app = create_app(settings=settings, store=store)
    with TestClient(app) as c:
        yield c
