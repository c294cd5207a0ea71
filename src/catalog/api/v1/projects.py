"""Project endpoints.

POST merges into an existing project when the name is already taken; the
response then carries `duplicate: true` and status 200 instead of 201.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.catalog.api.dependencies import CurrentPrincipal, ProjectServiceDep
from src.catalog.schemas.common import DeleteMessage
from src.catalog.schemas.pagination import PaginatedResponse
from src.catalog.schemas.project import (
    DUPLICATE_MESSAGE,
    ProjectBulkUpdate,
    ProjectCreate,
    ProjectCreateResponse,
    ProjectListMessage,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List all projects with cursor-based pagination, newest first.",
    responses={
        200: {"description": "Paginated list of projects"},
    },
)
async def list_projects(
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await service.list_projects(cursor=cursor, limit=limit)
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p.model_dump()) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/by-user",
    response_model=ProjectListMessage,
    summary="Get projects by user ID",
    responses={
        200: {"description": "Projects owned by the user (possibly none)"},
    },
)
async def list_projects_by_user(
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
    user_id: Annotated[str, Query(alias="userId", min_length=1, description="Owner ID")],
) -> ProjectListMessage:
    projects = await service.list_by_owner(user_id)
    if not projects:
        return ProjectListMessage(message=f"No projects found with user ID {user_id}", data=[])
    return ProjectListMessage(
        message=f"Projects with user ID {user_id} found",
        data=[ProjectRead.model_validate(p.model_dump()) for p in projects],
    )


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
) -> ProjectRead:
    project = await service.get_project(project_id)
    return ProjectRead.model_validate(project.model_dump())


@router.post(
    "",
    response_model=ProjectCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description=(
        "Create a new project. If a project with the same name exists, the submitted "
        "server/database/table tree is merged into it instead."
    ),
    responses={
        200: {"description": "Project already existed and was merged"},
        201: {"description": "Project created"},
        409: {"description": "Project name taken by a concurrent request"},
    },
)
async def create_project(
    request: ProjectCreate,
    response: Response,
    service: ProjectServiceDep,
    principal: CurrentPrincipal,
) -> ProjectCreateResponse:
    result = await service.create_project(request, principal_id=principal)

    if result.is_merge:
        response.status_code = status.HTTP_200_OK
    return ProjectCreateResponse.model_validate(
        {
            **result.project.model_dump(),
            "duplicate": result.is_merge,
            "message": DUPLICATE_MESSAGE if result.is_merge else None,
        }
    )


@router.patch(
    "",
    response_model=list[ProjectRead],
    summary="Update several projects",
    description="Apply a list of partial updates; each entry identifies its project by id.",
    responses={
        200: {"description": "Projects updated"},
        400: {"description": "Empty list"},
        404: {"description": "One of the projects was not found"},
    },
)
async def update_projects(
    request: list[ProjectBulkUpdate],
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
) -> list[ProjectRead]:
    projects = await service.update_many([entry.changes() for entry in request])
    return [ProjectRead.model_validate(p.model_dump()) for p in projects]


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Replace the supplied fields of a project. Nested trees are not merged.",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
        409: {"description": "Project with this name already exists"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
) -> ProjectRead:
    project = await service.update_project(project_id, request.changes())
    return ProjectRead.model_validate(project.model_dump())


@router.delete(
    "/{project_id}",
    response_model=DeleteMessage,
    summary="Delete project",
    responses={
        200: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    service: ProjectServiceDep,
    _principal: CurrentPrincipal,
) -> DeleteMessage:
    await service.delete_project(project_id)
    return DeleteMessage(message=f"Project {project_id} deleted successfully")
