"""Cursor-based pagination.

A cursor is the base64 form of the last returned row's sort value (an ISO
timestamp for project listings). Clients treat it as an opaque token.
"""

import base64
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus the cursor for the next one."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(value: Any) -> str:
    """Encode a sort value (datetime or anything with a str form) as a cursor."""
    raw = value.isoformat() if isinstance(value, datetime) else str(value)
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> datetime | str:
    """Decode a cursor back into its sort value.

    Raises:
        ValueError: If cursor is not valid base64 text
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e

    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return raw
