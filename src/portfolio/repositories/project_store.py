"""In-memory project store.

Holds the authoritative collection of Project records for the lifetime of the
process. Nothing is persisted; a restart starts from an empty store.
"""

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from src.portfolio.core.logging import get_logger
from src.portfolio.models import (
    Project,
    ProjectPage,
    ProjectStats,
    from_iso,
    to_iso,
    utc_now,
)
from src.portfolio.schemas.project import ProjectCreate, ProjectUpdate

logger = get_logger(__name__)

INITIAL_ID = 1

SAMPLE_PROJECTS: tuple[ProjectCreate, ...] = (
    ProjectCreate(
        name="E-commerce Platform",
        description="A modern e-commerce platform built with Node.js and React",
        tags=["javascript", "react", "nodejs", "ecommerce"],
        status="active",
    ),
    ProjectCreate(
        name="Task Management API",
        description="RESTful API for task management with authentication",
        tags=["api", "nodejs", "express", "authentication"],
        status="active",
    ),
    ProjectCreate(
        name="Data Analytics Dashboard",
        description="Real-time analytics dashboard with charts and graphs",
        tags=["dashboard", "analytics", "charts", "realtime"],
        status="completed",
    ),
)


class DuplicateNameError(ValueError):
    """Raised when a create or update would give two live projects the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Project with name '{name}' already exists")


class ProjectStore:
    """In-memory collection of projects keyed by id.

    Every public operation holds one re-entrant lock for its whole duration, so
    the name uniqueness check and id assignment cannot interleave with another
    caller's mutation.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._lock = threading.RLock()
        self._projects: dict[int, Project] = {}
        self._next_id = INITIAL_ID

    def _now(self) -> str:
        return to_iso(self._clock())

    def _find_by_name(self, name: str, exclude_id: int | None = None) -> Project | None:
        lowered = name.lower()
        for project in self._projects.values():
            if project.id != exclude_id and project.name.lower() == lowered:
                return project
        return None

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
    ) -> ProjectPage:
        """List projects newest first, optionally filtered by a search term.

        Args:
            page: 1-based page number
            limit: Maximum number of projects to return
            search: Case-insensitive substring matched against name,
                description and tags. Ignored when empty.

        Returns:
            The requested page and the number of matches before paging
        """
        with self._lock:
            projects = list(self._projects.values())

        if search:
            term = search.lower()
            projects = [p for p in projects if _matches(p, term)]

        # sorted() is stable, so equal timestamps keep insertion order
        projects = sorted(projects, key=lambda p: from_iso(p.created_at), reverse=True)

        start = (page - 1) * limit
        return ProjectPage(data=projects[start : start + limit], total=len(projects))

    def get_by_id(self, project_id: int) -> Project | None:
        """Get a project by id, or None if there is no such project."""
        with self._lock:
            return self._projects.get(project_id)

    def create(self, data: ProjectCreate) -> Project:
        """Create a project.

        Raises:
            DuplicateNameError: If a project with the same name (ignoring case) exists
        """
        with self._lock:
            if self._find_by_name(data.name) is not None:
                raise DuplicateNameError(data.name)

            now = self._now()
            project = Project.build(
                id=self._next_id,
                name=data.name,
                description=data.description,
                tags=data.tags,
                status=data.status,
                created_at=now,
                updated_at=now,
            )
            self._projects[project.id] = project
            self._next_id += 1

        logger.info("Project created", project_id=project.id, name=project.name)
        return project

    def update(self, project_id: int, data: ProjectUpdate) -> Project | None:
        """Apply the fields set on ``data`` to an existing project.

        The record is rebuilt: ``id`` and ``created_at`` keep their original
        values, ``updated_at`` is set to now and the hash is recomputed.

        Returns:
            The updated project, or None if there is no such project

        Raises:
            DuplicateNameError: If another project already uses the new name
        """
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        with self._lock:
            current = self._projects.get(project_id)
            if current is None:
                return None

            name = changes.get("name", current.name)
            if self._find_by_name(name, exclude_id=project_id) is not None:
                raise DuplicateNameError(name)

            updated = Project.build(
                id=current.id,
                name=name,
                description=changes.get("description", current.description),
                tags=changes.get("tags", current.tags),
                status=changes.get("status", current.status),
                created_at=current.created_at,
                updated_at=self._now(),
            )
            self._projects[project_id] = updated

        logger.info("Project updated", project_id=project_id, fields=sorted(changes))
        return updated

    def delete(self, project_id: int) -> bool:
        """Delete a project. Returns False if there is no such project."""
        with self._lock:
            removed = self._projects.pop(project_id, None)

        if removed is None:
            return False
        logger.info("Project deleted", project_id=project_id)
        return True

    def stats(self, project_id: int) -> ProjectStats | None:
        """Get derived statistics for a project, or None if there is no such project."""
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None
            now = self._clock()

        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        elapsed = now - from_iso(project.created_at)
        days = max(0, elapsed // timedelta(days=1))

        return ProjectStats(
            id=project.id,
            name=project.name,
            days_since_creation=days,
            tag_count=len(project.tags),
            status=project.status,
            has_description=bool(project.description),
            last_updated=project.updated_at,
            hash=project.hash,
        )

    def seed(self) -> bool:
        """Insert the sample projects into an empty store.

        Returns:
            True if the samples were inserted, False if the store already had data
        """
        with self._lock:
            if self._projects:
                return False
            for sample in SAMPLE_PROJECTS:
                self.create(sample)

        logger.info("Project store seeded", count=len(SAMPLE_PROJECTS))
        return True

    def clear(self) -> None:
        """Remove every project and reset id assignment. For tests and resets only."""
        with self._lock:
            self._projects.clear()
            self._next_id = INITIAL_ID
        logger.info("Project store cleared")

    def count(self) -> int:
        """Number of live projects."""
        with self._lock:
            return len(self._projects)


def _matches(project: Project, term: str) -> bool:
    if term in project.name.lower():
        return True
    if project.description and term in project.description.lower():
        return True
    return any(term in tag.lower() for tag in project.tags)
