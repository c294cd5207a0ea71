"""User profile service.

Registering an email that is already taken is not an error: the stored user
is returned as `UserExisting` and nothing is written.
"""

from dataclasses import dataclass
from typing import Any, Literal
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.core.cache import cache_user, evict_user, get_cached_user
from src.catalog.core.exceptions import (
    UserConflictError,
    UserNotFoundError,
    UserValidationError,
)
from src.catalog.core.logging import get_logger
from src.catalog.models.base import utc_now
from src.catalog.repositories.user import UserRepository
from src.catalog.schemas.user import UserCreate, UserRead

logger = get_logger(__name__)

# Fields a client can never set through an update
PROTECTED_FIELDS = frozenset({"id", "created_at", "createdAt", "updated_at", "updatedAt"})

# Columns an update may write directly; other keys go to `attributes`
UPDATABLE_COLUMNS = frozenset(UserRead.record_columns) - PROTECTED_FIELDS

NOT_NULL_COLUMNS = frozenset({"email", "role", "is_active"})


@dataclass(frozen=True)
class UserCreated:
    """No user had the submitted email; a new record was inserted."""

    user: UserRead
    is_duplicate: Literal[False] = False


@dataclass(frozen=True)
class UserExisting:
    """A user with the submitted email was already registered."""

    user: UserRead
    is_duplicate: Literal[True] = True


type CreateUserResult = UserCreated | UserExisting


class UserService:
    """User management over one database session."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def create_user(self, data: UserCreate) -> CreateUserResult:
        """Register a user, or return the one already holding the email.

        Raises:
            UserValidationError: If the email is empty
            UserConflictError: If a concurrent request registered the email first
        """
        email = data.email.strip() if data.email else ""
        if not email:
            raise UserValidationError("Email is required")

        existing = await self.user_repo.get_by_email(email)
        if existing is not None:
            logger.info("User already registered", user_id=str(existing.id))
            return UserExisting(UserRead.from_record(existing))

        now = utc_now()
        fields = data.record_fields()
        fields.update(email=email, created_at=now, updated_at=now)

        try:
            user_id = await self.user_repo.create(fields)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise UserConflictError(email) from e
        except Exception:
            await self.session.rollback()
            raise

        record = await self.user_repo.get_by_id(user_id)
        logger.info("User created", user_id=str(user_id))
        return UserCreated(UserRead.from_record(record))  # type: ignore[arg-type]

    async def list_users(
        self,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[UserRead], str | None, bool]:
        records, next_cursor, has_more = await self.user_repo.list_all(cursor=cursor, limit=limit)
        return [UserRead.from_record(r) for r in records], next_cursor, has_more

    async def get_user(self, user_id: UUID) -> UserRead:
        """Get a user by id, reading through the cache.

        Raises:
            UserNotFoundError: If no user has this id
        """
        cached = await get_cached_user(user_id)
        if cached is not None:
            return UserRead.model_validate_json(cached)

        record = await self.user_repo.get_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        user = UserRead.from_record(record)
        await cache_user(user_id, user.model_dump_json())
        return user

    async def get_user_by_email(self, email: str) -> UserRead:
        record = await self.user_repo.get_by_email(email)
        if record is None:
            raise UserNotFoundError(email=email)
        return UserRead.from_record(record)

    async def update_user(self, user_id: UUID, data: dict[str, Any]) -> UserRead:
        """Replace the given fields of a user.

        `id` and timestamps in `data` are ignored; `updated_at` is refreshed.

        Raises:
            UserNotFoundError: If no user has this id
            UserValidationError: If a required field is cleared
            UserConflictError: If the new email belongs to another user
        """
        try:
            user = await self._apply_update(user_id, data)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise UserConflictError(str(data.get("email"))) from e
        except Exception:
            await self.session.rollback()
            raise

        await evict_user(user_id)
        return user

    async def update_many(self, updates: list[dict[str, Any]]) -> list[UserRead]:
        """Apply several updates in one transaction.

        Raises:
            UserValidationError: If the list is empty or an entry has no id
            UserNotFoundError: If any id is unknown (nothing is written)
        """
        if not updates:
            raise UserValidationError("Bulk update expects a non-empty list of user updates")

        targets: list[tuple[UUID, dict[str, Any]]] = []
        for entry in updates:
            entry = dict(entry)
            user_id = entry.pop("id", None)
            if not user_id:
                raise UserValidationError("Each user update must include an id")
            targets.append((UUID(str(user_id)), entry))

        try:
            users = [await self._apply_update(uid, data) for uid, data in targets]
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise UserConflictError("bulk update") from e
        except Exception:
            await self.session.rollback()
            raise

        for user_id, _ in targets:
            await evict_user(user_id)
        return users

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user, then drop the cached profile (best-effort).

        Projects owned by the user are left in place.

        Raises:
            UserNotFoundError: If no user has this id
        """
        try:
            deleted = await self.user_repo.delete(user_id)
            if not deleted:
                raise UserNotFoundError(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User deleted", user_id=str(user_id))
        await evict_user(user_id)

    async def _apply_update(self, user_id: UUID, data: dict[str, Any]) -> UserRead:
        record = await self.user_repo.get_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)

        changes = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        for field in NOT_NULL_COLUMNS & changes.keys():
            if changes[field] is None or changes[field] == "":
                raise UserValidationError(f"{field} cannot be empty")

        columns = {k: v for k, v in changes.items() if k in UPDATABLE_COLUMNS}
        extra = {k: v for k, v in changes.items() if k not in UPDATABLE_COLUMNS}
        if extra:
            columns["attributes"] = {**(record.attributes or {}), **extra}
        columns["updated_at"] = utc_now()

        updated = await self.user_repo.update(user_id, columns)
        logger.info("User updated", user_id=str(user_id), fields=sorted(changes))
        return UserRead.from_record(updated)  # type: ignore[arg-type]
