"""Schemas shared by the project and user endpoints."""

from typing import Any

from pydantic import BaseModel

# Set by the server on create responses only
RESERVED_RESPONSE_KEYS = frozenset({"duplicate", "message"})


def reject_reserved_keys(data: Any) -> Any:
    """Refuse request bodies that carry server-set response fields."""
    if isinstance(data, dict):
        reserved = sorted(RESERVED_RESPONSE_KEYS & data.keys())
        if reserved:
            raise ValueError(f"Reserved fields cannot be submitted: {', '.join(reserved)}")
    return data


class DeleteMessage(BaseModel):
    message: str
