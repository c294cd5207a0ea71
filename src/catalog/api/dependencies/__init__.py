"""FastAPI dependency injection definitions."""

from src.catalog.api.dependencies.auth import CurrentPrincipal, get_current_principal
from src.catalog.api.dependencies.db import DBSession, get_db_session
from src.catalog.api.dependencies.repositories import (
    ProjectRepo,
    UserRepo,
    get_project_repository,
    get_user_repository,
)
from src.catalog.api.dependencies.services import (
    ProjectServiceDep,
    UserServiceDep,
    get_project_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentPrincipal",
    "get_current_principal",
    # Repositories
    "ProjectRepo",
    "UserRepo",
    "get_project_repository",
    "get_user_repository",
    # Services
    "ProjectServiceDep",
    "UserServiceDep",
    "get_project_service",
    "get_user_service",
]
