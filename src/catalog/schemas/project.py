"""Project schemas for API request/response."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.catalog.domain.tree import TREE_MODEL_CONFIG, ProjectTree, SqlServerNode
from src.catalog.schemas.common import reject_reserved_keys

DUPLICATE_MESSAGE = "Project with this name already exists"


class ProjectCreate(ProjectTree):
    """Schema for creating a project.

    Any `id`, `createdAt` or `updatedAt` sent by the client is ignored.
    """

    name: str = Field(min_length=1, max_length=200)

    @model_validator(mode="before")
    @classmethod
    def check_reserved_keys(cls, data: Any) -> Any:
        return reject_reserved_keys(data)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Unknown fields are stored as-is."""

    model_config = TREE_MODEL_CONFIG

    name: str | None = Field(default=None, min_length=1, max_length=200)
    user_id: str | None = None
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = None
    sql_servers: list[SqlServerNode] | None = None

    @model_validator(mode="before")
    @classmethod
    def check_reserved_keys(cls, data: Any) -> Any:
        return reject_reserved_keys(data)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ProjectBulkUpdate(ProjectUpdate):
    """One entry of a bulk update."""

    id: UUID

    def changes(self) -> dict[str, Any]:
        data = super().changes()
        data["id"] = self.id
        return data


class ProjectRead(ProjectTree):
    """Schema for reading a project."""


class ProjectCreateResponse(ProjectRead):
    """Result of POST /projects.

    `duplicate` is true when the submission was merged into an existing
    project with the same name.
    """

    duplicate: bool = False
    message: str | None = None


class ProjectListMessage(BaseModel):
    """Projects wrapped with a human-readable message."""

    message: str
    data: list[ProjectRead]

