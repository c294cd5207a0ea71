"""Authentication dependency.

Tokens and credentials are issued by an external identity provider; requests
carry a bearer JWT whose subject identifies the caller.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.catalog.core.logging import bind_principal_context
from src.catalog.core.security import ACCESS_TOKEN_TYPE, decode_token


async def get_current_principal(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Validate the bearer token and return its subject."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    payload = decode_token(authorization[7:])
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    principal_id = payload.get("sub")
    if not principal_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    bind_principal_context(principal_id)
    return str(principal_id)


CurrentPrincipal = Annotated[str, Depends(get_current_principal)]
