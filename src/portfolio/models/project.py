"""Project record - immutable value held by the project store."""

import hashlib

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HASH_LENGTH = 8


def compute_project_hash(name: str, description: str | None, created_at: str) -> str:
    """Return the short content fingerprint of a project.

    The fingerprint is the first 8 hex characters of the SHA-256 digest of
    ``name + description + created_at``. A missing description contributes
    the text ``null``. Used for display and identity, not for security.
    """
    content = f"{name}{'null' if description is None else description}{created_at}"
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:HASH_LENGTH]


class Project(BaseModel):
    """A project record.

    Instances are frozen: the store replaces records instead of mutating them.
    Field names serialize as camelCase (``createdAt``, ``updatedAt``).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int = Field(gt=0)
    name: str
    description: str | None = None
    tags: tuple[str, ...] = ()
    status: str = "active"
    created_at: str
    updated_at: str
    hash: str

    @classmethod
    def build(
        cls,
        *,
        id: int,
        name: str,
        description: str | None,
        tags: tuple[str, ...] | list[str],
        status: str,
        created_at: str,
        updated_at: str,
    ) -> "Project":
        """Build a record, deriving its hash from name, description and created_at."""
        return cls(
            id=id,
            name=name,
            description=description,
            tags=tuple(tags),
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            hash=compute_project_hash(name, description, created_at),
        )


class ProjectStats(BaseModel):
    """Derived read-only view of a project."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    days_since_creation: int
    tag_count: int
    status: str
    has_description: bool
    last_updated: str
    hash: str


class ProjectPage(BaseModel):
    """One page of projects plus the filtered total before paging."""

    model_config = ConfigDict(frozen=True)

    data: list[Project]
    total: int
