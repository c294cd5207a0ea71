"""Base repository with common data access operations."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.catalog.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """Get the first record whose `field` equals `value` exactly."""
        column = getattr(self.model, field)
        result = await self.session.execute(select(self.model).where(column == value).limit(1))
        return result.scalars().first()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def create(self, data: dict[str, Any]) -> UUID:
        """Insert a new row and return its generated id."""
        entity = self.model(**data)
        self.add(entity)
        await self.session.flush()
        return entity.id  # type: ignore[attr-defined]

    async def update(self, id: UUID, data: dict[str, Any]) -> ModelType | None:
        """Overwrite the given columns of an existing row.

        Returns:
            The updated row, or None if no row has this id
        """
        entity = await self.get_by_id(id)
        if entity is None:
            return None
        for field, value in data.items():
            setattr(entity, field, value)
        await self.session.flush()
        return entity

    async def delete(self, id: UUID) -> bool:
        """Delete a row. Returns False if it did not exist."""
        entity = await self.get_by_id(id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.flush()
        return True

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query, newest first.

        Args:
            query: The base query to paginate
            cursor: Optional cursor from previous page
            limit: Maximum number of items to return
            cursor_field: Column used for ordering and as the cursor value

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                query = query.where(cursor_field < decode_cursor(cursor))
            except ValueError:
                # Invalid cursor - ignore and start from beginning
                pass

        # One extra row tells whether another page exists
        query = query.order_by(cursor_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if value is not None:
                next_cursor = encode_cursor(value)

        return items, next_cursor, has_more
