from src.portfolio.models.base import from_iso, to_iso, utc_now
from src.portfolio.models.project import (
    Project,
    ProjectPage,
    ProjectStats,
    compute_project_hash,
)

__all__ = [
    "Project",
    "ProjectPage",
    "ProjectStats",
    "compute_project_hash",
    "from_iso",
    "to_iso",
    "utc_now",
]
