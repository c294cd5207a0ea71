"""Persistence gateway for projects."""

from typing import Any, Protocol
from uuid import UUID

from sqlmodel import select

from src.catalog.models import Project
from src.catalog.repositories.base import BaseRepository


class ProjectGateway(Protocol):
    """What the project services need from storage.

    Lookups by field are exact equality matches. Writes are not committed here.
    """

    async def find_by_field(self, field: str, value: Any) -> Project | None: ...

    async def get_by_id(self, id: UUID) -> Project | None: ...

    async def create(self, data: dict[str, Any]) -> UUID: ...

    async def update(self, id: UUID, data: dict[str, Any]) -> Project | None: ...

    async def delete(self, id: UUID) -> bool: ...


class ProjectRepository(BaseRepository[Project]):
    """SQLModel-backed project gateway."""

    model = Project

    async def list_all(
        self,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects with cursor-based pagination, newest first."""
        query = select(Project)
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def list_by_owner(self, user_id: str) -> list[Project]:
        """All projects owned by `user_id`, oldest first."""
        result = await self.session.execute(
            select(Project).where(Project.user_id == user_id).order_by(Project.created_at)
        )
        return list(result.scalars().all())
