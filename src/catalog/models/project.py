"""Project model - one row per project, the server tree stored as a JSON document."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.catalog.models.base import utc_now


class Project(SQLModel, table=True):
    """Stored project record.

    `sql_servers` holds the canonical (name-sorted) server → database → table
    tree exactly as it is returned to clients. `attributes` holds top-level
    fields that have no dedicated column.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, unique=True, index=True)
    user_id: str | None = Field(default=None, max_length=128, index=True)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = Field(default=None)
    sql_servers: list[dict[str, Any]] | None = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )
    attributes: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
