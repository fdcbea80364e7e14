"""Project endpoints - CRUD, search and statistics over the in-memory store."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from src.portfolio.api.dependencies import ProjectStoreDep
from src.portfolio.core.logging import get_logger
from src.portfolio.repositories import DuplicateNameError, ProjectStore
from src.portfolio.schemas import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MessageResponse,
    PaginationMeta,
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectRead,
    ProjectStatsRead,
    ProjectUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectId = Annotated[int, Path(description="Project ID")]

NOT_FOUND_RESPONSE = {404: {"description": "Project not found"}}
BAD_REQUEST_RESPONSE = {400: {"description": "Invalid request parameters or body"}}


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Project not found",
    )


def _conflict(exc: DuplicateNameError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=str(exc),
    )


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="List projects newest first with page/limit pagination and optional search.",
    responses={
        200: {"description": "Paginated list of projects"},
        **BAD_REQUEST_RESPONSE,
    },
)
async def list_projects(
    store: ProjectStoreDep,
    response: Response,
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Max items to return")
    ] = DEFAULT_PAGE_SIZE,
    search: Annotated[
        str | None,
        Query(description="Case-insensitive match on name, description or tags"),
    ] = None,
) -> ProjectListResponse:
    """List projects with offset pagination."""
    result = store.list(page=page, limit=limit, search=search)
    response.headers["X-Total-Count"] = str(result.total)
    return ProjectListResponse(
        projects=[ProjectRead.from_project(p) for p in result.data],
        pagination=PaginationMeta.for_page(page=page, limit=limit, total=result.total),
    )


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    description="Get a project by ID.",
    responses={
        200: {"description": "Project details"},
        **BAD_REQUEST_RESPONSE,
        **NOT_FOUND_RESPONSE,
    },
)
async def get_project(project_id: ProjectId, store: ProjectStoreDep) -> ProjectRead:
    """Get a project by ID."""
    project = store.get_by_id(project_id)
    if project is None:
        raise _not_found()
    return ProjectRead.from_project(project)


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        **BAD_REQUEST_RESPONSE,
        409: {"description": "Project with this name already exists"},
    },
)
async def create_project(request: ProjectCreate, store: ProjectStoreDep) -> ProjectMutationResponse:
    """Create a new project."""
    try:
        project = store.create(request)
    except DuplicateNameError as e:
        logger.info("Duplicate project name rejected", name=e.name)
        raise _conflict(e) from e

    return ProjectMutationResponse(
        message="Project created successfully",
        project=ProjectRead.from_project(project),
    )


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Replace project",
    description="Replace every mutable field of a project. Omitted fields take their defaults.",
    responses={
        200: {"description": "Project updated"},
        **BAD_REQUEST_RESPONSE,
        **NOT_FOUND_RESPONSE,
        409: {"description": "Project with this name already exists"},
    },
)
async def replace_project(
    project_id: ProjectId,
    request: ProjectCreate,
    store: ProjectStoreDep,
) -> ProjectMutationResponse:
    """Replace an existing project."""
    return _apply_update(store, project_id, ProjectUpdate.replacing(request))


@router.patch(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Update project",
    description="Update only the supplied fields of a project.",
    responses={
        200: {"description": "Project updated"},
        **BAD_REQUEST_RESPONSE,
        **NOT_FOUND_RESPONSE,
        409: {"description": "Project with this name already exists"},
    },
)
async def update_project(
    project_id: ProjectId,
    request: ProjectUpdate,
    store: ProjectStoreDep,
) -> ProjectMutationResponse:
    """Update an existing project."""
    return _apply_update(store, project_id, request)


def _apply_update(
    store: ProjectStore, project_id: int, changes: ProjectUpdate
) -> ProjectMutationResponse:
    try:
        project = store.update(project_id, changes)
    except DuplicateNameError as e:
        logger.info("Duplicate project name rejected", name=e.name, project_id=project_id)
        raise _conflict(e) from e

    if project is None:
        raise _not_found()

    return ProjectMutationResponse(
        message="Project updated successfully",
        project=ProjectRead.from_project(project),
    )


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    responses={
        200: {"description": "Project deleted"},
        **BAD_REQUEST_RESPONSE,
        **NOT_FOUND_RESPONSE,
    },
)
async def delete_project(project_id: ProjectId, store: ProjectStoreDep) -> MessageResponse:
    """Delete a project."""
    if not store.delete(project_id):
        raise _not_found()
    return MessageResponse(message="Project deleted successfully")


@router.get(
    "/{project_id}/stats",
    response_model=ProjectStatsRead,
    summary="Get project statistics",
    responses={
        200: {"description": "Derived project statistics"},
        **BAD_REQUEST_RESPONSE,
        **NOT_FOUND_RESPONSE,
    },
)
async def get_project_stats(project_id: ProjectId, store: ProjectStoreDep) -> ProjectStatsRead:
    """Get derived statistics for a project."""
    stats = store.stats(project_id)
    if stats is None:
        raise _not_found()
    return ProjectStatsRead.model_validate(stats)
