"""Repository layer - data access abstraction."""

from src.catalog.repositories.base import BaseRepository
from src.catalog.repositories.project import ProjectGateway, ProjectRepository
from src.catalog.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectGateway",
    "ProjectRepository",
    "UserRepository",
]
