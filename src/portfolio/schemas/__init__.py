from src.portfolio.schemas.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationMeta
from src.portfolio.schemas.project import (
    MessageResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectRead,
    ProjectStatsRead,
    ProjectUpdate,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MessageResponse",
    "PaginationMeta",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectMutationResponse",
    "ProjectRead",
    "ProjectStatsRead",
    "ProjectUpdate",
]
