"""Test helper functions for common data creation patterns."""

from datetime import datetime, timedelta

from src.portfolio.models import Project
from src.portfolio.repositories import ProjectStore
from src.portfolio.schemas import ProjectCreate


class FakeClock:
    """Callable clock for ProjectStore that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        """Move the clock forward by a ``timedelta(**kwargs)``."""
        self.now += timedelta(**kwargs)
        return self.now


def create_projects(
    store: ProjectStore,
    clock: FakeClock,
    count: int,
    prefix: str = "Project",
) -> list[Project]:
    """Create ``count`` projects one second apart, oldest first.

    Args:
        store: Store to create the projects in
        clock: Clock driving the store, advanced between creates
        count: Number of projects to create
        prefix: Name prefix; projects are named "<prefix> 1" .. "<prefix> N"

    Returns:
        The created projects in creation order
    """
    created = []
    for i in range(1, count + 1):
        created.append(store.create(ProjectCreate(name=f"{prefix} {i}")))
        clock.advance(seconds=1)
    return created
