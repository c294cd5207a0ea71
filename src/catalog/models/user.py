"""User model - profile of a project owner.

Credentials are held by the external identity provider that issues access
tokens; no password is stored here.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.catalog.models.base import utc_now


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    display_name: str | None = Field(default=None, max_length=200)
    photo_url: str | None = Field(default=None, max_length=2048)
    phone_number: str | None = Field(default=None, max_length=32)
    provider: str | None = Field(default=None, max_length=50)
    role: str = Field(default="user", max_length=50)
    is_active: bool = Field(default=True)
    # Profile fields without a dedicated column
    attributes: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    last_login_at: datetime | None = Field(default=None)
