"""Project schemas for API request/response."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.portfolio.models import Project
from src.portfolio.schemas.pagination import PaginationMeta

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
DEFAULT_STATUS = "active"


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name is required and must be a non-empty string")
    return v


def _clean_description(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


def _coerce_tags(v: Any) -> Any:
    # Anything that is not a list is treated as "no tags"; items are stored as text
    if isinstance(v, (list, tuple)):
        return [item if isinstance(item, str) else str(item) for item in v]
    return []


class ProjectCreate(BaseModel):
    """Schema for creating a project, also used as the PUT (full replacement) body."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    tags: list[str] = Field(default_factory=list)
    status: str = DEFAULT_STATUS

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _clean_description(v)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> Any:
        return _coerce_tags(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_STATUS
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project.

    Only fields that were explicitly supplied are applied to the record.
    """

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    tags: list[str] | None = None
    status: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = _clean_name(v)
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _clean_description(v)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> Any:
        return _coerce_tags(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return DEFAULT_STATUS
        return v

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> Self:
        for field in ("name", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    @classmethod
    def replacing(cls, data: ProjectCreate) -> "ProjectUpdate":
        """Build an update that overwrites every mutable field (PUT semantics)."""
        return cls.model_validate(data.model_dump())


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    description: str | None
    tags: list[str]
    status: str
    created_at: str
    updated_at: str
    hash: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectRead":
        return cls.model_validate(project)


class ProjectStatsRead(BaseModel):
    """Schema for project statistics."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    days_since_creation: int
    tag_count: int
    status: str
    has_description: bool
    last_updated: str
    hash: str


class ProjectListResponse(BaseModel):
    """One page of projects with pagination metadata."""

    projects: list[ProjectRead]
    pagination: PaginationMeta


class ProjectMutationResponse(BaseModel):
    """Response for create and update."""

    message: str
    project: ProjectRead


class MessageResponse(BaseModel):
    message: str
