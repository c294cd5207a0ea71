"""Request/response schemas."""

from src.catalog.schemas.common import DeleteMessage
from src.catalog.schemas.pagination import PaginatedResponse, decode_cursor, encode_cursor
from src.catalog.schemas.project import (
    DUPLICATE_MESSAGE,
    ProjectBulkUpdate,
    ProjectCreate,
    ProjectCreateResponse,
    ProjectListMessage,
    ProjectRead,
    ProjectUpdate,
)
from src.catalog.schemas.user import (
    UserBulkUpdate,
    UserCreate,
    UserCreateResponse,
    UserRead,
    UserUpdate,
)

__all__ = [
    # Common
    "DeleteMessage",
    # Pagination
    "PaginatedResponse",
    "decode_cursor",
    "encode_cursor",
    # Project
    "DUPLICATE_MESSAGE",
    "ProjectBulkUpdate",
    "ProjectCreate",
    "ProjectCreateResponse",
    "ProjectListMessage",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "UserBulkUpdate",
    "UserCreate",
    "UserCreateResponse",
    "UserRead",
    "UserUpdate",
]
