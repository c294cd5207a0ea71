"""Repository for User entity."""

from sqlmodel import select

from src.catalog.models import User
from src.catalog.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """SQLModel-backed user storage. Writes are flushed, never committed."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by exact email address."""
        return await self.find_by_field("email", email)

    async def list_all(
        self,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[User], str | None, bool]:
        """List users with cursor-based pagination, newest first."""
        return await self.paginate(select(User), cursor, limit, User.created_at)
