"""Data access layer.

Exports:
    - ProjectStore: In-memory project collection
    - DuplicateNameError: Raised on case-insensitive project name collisions
"""

from src.portfolio.repositories.project_store import (
    SAMPLE_PROJECTS,
    DuplicateNameError,
    ProjectStore,
)

__all__ = [
    "SAMPLE_PROJECTS",
    "DuplicateNameError",
    "ProjectStore",
]
