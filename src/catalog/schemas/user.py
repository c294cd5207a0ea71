"""User schemas for API request/response.

Profiles accept fields beyond the declared ones; those are kept in the
`attributes` column and returned flattened, camelCase on the wire.
"""

from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from src.catalog.models import User
from src.catalog.schemas.common import reject_reserved_keys

DUPLICATE_MESSAGE = "User with this email already exists"

USER_MODEL_CONFIG = ConfigDict(
    extra="allow",
    alias_generator=to_camel,
    populate_by_name=True,
)

# Credentials belong to the identity provider and are never stored
CREDENTIAL_KEYS = frozenset({"password"})

# Set by the server on create
SERVER_SET_KEYS = frozenset({"id", "createdAt", "created_at", "updatedAt", "updated_at"})


def _without(data: Any, keys: frozenset[str]) -> Any:
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if k not in keys}
    return data


class UserCreate(BaseModel):
    """Schema for registering a user profile.

    A `password` is accepted for compatibility and dropped; `id` and
    timestamps sent by the client are ignored.
    """

    model_config = USER_MODEL_CONFIG

    email: EmailStr
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    display_name: str | None = Field(default=None, max_length=200)
    photo_url: str | None = Field(default=None, max_length=2048)
    phone_number: str | None = Field(default=None, max_length=32)
    provider: str | None = Field(default=None, max_length=50)
    role: str = Field(default="user", min_length=1, max_length=50)
    is_active: bool = True
    last_login_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def check_submitted_keys(cls, data: Any) -> Any:
        data = reject_reserved_keys(data)
        return _without(data, CREDENTIAL_KEYS | SERVER_SET_KEYS)

    def record_fields(self) -> dict[str, Any]:
        """Column values for a new users row."""
        extra = dict(self.model_extra or {})
        fields = self.model_dump(exclude=set(extra))
        fields["attributes"] = extra
        return fields


class UserUpdate(BaseModel):
    """Schema for updating a user. Unknown fields are stored as-is."""

    model_config = USER_MODEL_CONFIG

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    display_name: str | None = Field(default=None, max_length=200)
    photo_url: str | None = Field(default=None, max_length=2048)
    phone_number: str | None = Field(default=None, max_length=32)
    provider: str | None = Field(default=None, max_length=50)
    role: str | None = Field(default=None, min_length=1, max_length=50)
    is_active: bool | None = None
    last_login_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def check_submitted_keys(cls, data: Any) -> Any:
        data = reject_reserved_keys(data)
        return _without(data, CREDENTIAL_KEYS)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class UserBulkUpdate(UserUpdate):
    """One entry of a bulk update."""

    id: UUID

    def changes(self) -> dict[str, Any]:
        data = super().changes()
        data["id"] = self.id
        return data


class UserRead(BaseModel):
    model_config = USER_MODEL_CONFIG

    # Columns of the users table; everything else lives in `attributes`
    record_columns: ClassVar[tuple[str, ...]] = (
        "id",
        "email",
        "first_name",
        "last_name",
        "display_name",
        "photo_url",
        "phone_number",
        "provider",
        "role",
        "is_active",
        "created_at",
        "updated_at",
        "last_login_at",
    )

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    phone_number: str | None = None
    provider: str | None = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None

    @classmethod
    def from_record(cls, record: User) -> "UserRead":
        data: dict[str, Any] = dict(record.attributes or {})
        data.update({column: getattr(record, column) for column in cls.record_columns})
        return cls.model_validate(data)


class UserCreateResponse(UserRead):
    """Result of POST /users.

    `duplicate` is true when a user with the submitted email already existed;
    the stored user is returned unchanged.
    """

    duplicate: bool = False
    message: str | None = None
