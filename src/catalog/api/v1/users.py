"""User endpoints.

POST with an email that is already registered returns the stored user with
`duplicate: true` and status 200 instead of 201.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, Response, status

from src.catalog.api.dependencies import CurrentPrincipal, UserServiceDep
from src.catalog.schemas.common import DeleteMessage
from src.catalog.schemas.pagination import PaginatedResponse
from src.catalog.schemas.user import (
    DUPLICATE_MESSAGE,
    UserBulkUpdate,
    UserCreate,
    UserCreateResponse,
    UserRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=PaginatedResponse[UserRead],
    summary="List users",
    description="List all users with cursor-based pagination, newest first.",
)
async def list_users(
    service: UserServiceDep,
    _principal: CurrentPrincipal,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[UserRead]:
    users, next_cursor, has_more = await service.list_users(cursor=cursor, limit=limit)
    return PaginatedResponse(items=users, next_cursor=next_cursor, has_more=has_more)


@router.get(
    "/by-email/{email}",
    response_model=UserRead,
    summary="Get user by email",
    responses={
        200: {"description": "User details"},
        404: {"description": "User not found"},
    },
)
async def get_user_by_email(
    email: Annotated[str, Path(min_length=1)],
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> UserRead:
    return await service.get_user_by_email(email)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    responses={
        200: {"description": "User details"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: UUID,
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> UserRead:
    return await service.get_user(user_id)


@router.post(
    "",
    response_model=UserCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={
        200: {"description": "A user with this email already existed"},
        201: {"description": "User created"},
        400: {"description": "Missing or invalid email"},
        409: {"description": "Email taken by a concurrent request"},
    },
)
async def create_user(
    request: UserCreate,
    response: Response,
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> UserCreateResponse:
    result = await service.create_user(request)

    if result.is_duplicate:
        response.status_code = status.HTTP_200_OK
    return UserCreateResponse.model_validate(
        {
            **result.user.model_dump(),
            "duplicate": result.is_duplicate,
            "message": DUPLICATE_MESSAGE if result.is_duplicate else None,
        }
    )


@router.patch(
    "",
    response_model=list[UserRead],
    summary="Update several users",
    responses={
        200: {"description": "Users updated"},
        400: {"description": "Empty list"},
        404: {"description": "One of the users was not found"},
    },
)
async def update_users(
    request: list[UserBulkUpdate],
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> list[UserRead]:
    return await service.update_many([entry.changes() for entry in request])


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    responses={
        200: {"description": "User updated"},
        404: {"description": "User not found"},
        409: {"description": "Email belongs to another user"},
    },
)
async def update_user(
    user_id: UUID,
    request: UserUpdate,
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> UserRead:
    return await service.update_user(user_id, request.changes())


@router.delete(
    "/{user_id}",
    response_model=DeleteMessage,
    summary="Delete user",
    responses={
        200: {"description": "User deleted"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: UUID,
    service: UserServiceDep,
    _principal: CurrentPrincipal,
) -> DeleteMessage:
    await service.delete_user(user_id)
    return DeleteMessage(message=f"User {user_id} deleted successfully")
