"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.catalog.api.dependencies.db import DBSession
from src.catalog.api.dependencies.repositories import ProjectRepo, UserRepo
from src.catalog.services.project_service import ProjectService
from src.catalog.services.user_service import UserService


def get_project_service(project_repo: ProjectRepo, session: DBSession) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, session)


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    """Get user service."""
    return UserService(user_repo, session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
