"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.catalog.api.dependencies.db import DBSession
from src.catalog.repositories import ProjectRepository, UserRepository


def get_project_repository(session: DBSession) -> ProjectRepository:
    """Get project repository bound to the request session."""
    return ProjectRepository(session)


def get_user_repository(session: DBSession) -> UserRepository:
    """Get user repository bound to the request session."""
    return UserRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
