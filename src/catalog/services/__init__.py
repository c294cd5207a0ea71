from src.catalog.services.duplicate_resolver import (
    DuplicateResolver,
    ProjectCreated,
    ProjectMerged,
)
from src.catalog.services.project_service import ProjectService
from src.catalog.services.user_service import UserCreated, UserExisting, UserService

__all__ = [
    "DuplicateResolver",
    "ProjectCreated",
    "ProjectMerged",
    "ProjectService",
    "UserCreated",
    "UserExisting",
    "UserService",
]
