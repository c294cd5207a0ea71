"""Project management service.

`create_project` is the entry point of the create-or-merge pipeline; the rest
is plain CRUD around the same gateway.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.core.cache import cache_project, evict_project, get_cached_project
from src.catalog.core.exceptions import (
    ProjectConflictError,
    ProjectNotFoundError,
    ProjectValidationError,
)
from src.catalog.core.logging import get_logger
from src.catalog.domain.tree import ProjectTree
from src.catalog.models.base import utc_now
from src.catalog.repositories.project import ProjectRepository
from src.catalog.services.duplicate_resolver import DuplicateResolver, ResolveResult
from src.catalog.services.tree_sorter import canonicalize

logger = get_logger(__name__)

# Fields a client can never set through an update
PROTECTED_FIELDS = frozenset({"id", "created_at", "createdAt", "updated_at", "updatedAt"})


class ProjectService:
    """Project operations over one database session."""

    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session
        self.resolver = DuplicateResolver(project_repo)

    async def create_project(
        self,
        candidate: ProjectTree,
        principal_id: str | None = None,
    ) -> ResolveResult:
        """Create a project, or merge it into the stored project with the same name.

        Args:
            candidate: The submitted project tree
            principal_id: Authenticated caller, used as owner when none is given

        Returns:
            ProjectCreated or ProjectMerged carrying the resulting project

        Raises:
            ProjectValidationError: If the name is empty
            ProjectConflictError: If a concurrent create took the name first
        """
        name = candidate.name.strip() if candidate.name else ""
        if not name:
            raise ProjectValidationError("Project name is required")

        now = utc_now()
        update: dict[str, Any] = {"id": None, "created_at": now, "updated_at": now}
        if name != candidate.name:
            update["name"] = name
        if not candidate.user_id and principal_id:
            update["user_id"] = principal_id

        candidate = canonicalize(candidate.model_copy(update=update))

        try:
            result = await self.resolver.resolve_and_persist(candidate)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ProjectConflictError(name) from e
        except Exception:
            await self.session.rollback()
            raise

        if result.is_merge:
            await evict_project(result.project.id)  # type: ignore[arg-type]
        return result

    async def list_projects(
        self,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ProjectTree], str | None, bool]:
        records, next_cursor, has_more = await self.project_repo.list_all(
            cursor=cursor, limit=limit
        )
        return [ProjectTree.from_record(r) for r in records], next_cursor, has_more

    async def list_by_owner(self, user_id: str) -> list[ProjectTree]:
        records = await self.project_repo.list_by_owner(user_id)
        return [ProjectTree.from_record(r) for r in records]

    async def get_project(self, project_id: UUID) -> ProjectTree:
        """Get a project by id, reading through the cache.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        cached = await get_cached_project(project_id)
        if cached is not None:
            return ProjectTree.model_validate_json(cached)

        record = await self.project_repo.get_by_id(project_id)
        if record is None:
            raise ProjectNotFoundError(project_id)

        project = ProjectTree.from_record(record)
        await cache_project(project_id, project.model_dump_json(exclude_unset=True))
        return project

    async def update_project(self, project_id: UUID, data: dict[str, Any]) -> ProjectTree:
        """Replace the given fields of a project.

        Unlike a create with an existing name, nothing is merged: a supplied
        `sql_servers` list replaces the stored one. `id` and timestamps in
        `data` are ignored; `updated_at` is refreshed.

        Raises:
            ProjectNotFoundError: If no project has this id
            ProjectConflictError: If the new name belongs to another project
        """
        try:
            project = await self._apply_update(project_id, data)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ProjectConflictError(str(data.get("name"))) from e
        except Exception:
            await self.session.rollback()
            raise

        await evict_project(project_id)
        return project

    async def update_many(self, updates: list[dict[str, Any]]) -> list[ProjectTree]:
        """Apply several updates in one transaction.

        Each entry must carry the `id` of the project it updates.

        Raises:
            ProjectValidationError: If the list is empty or an entry has no id
            ProjectNotFoundError: If any id is unknown (nothing is written)
        """
        if not updates:
            raise ProjectValidationError("Bulk update expects a non-empty list of project updates")

        targets: list[tuple[UUID, dict[str, Any]]] = []
        for entry in updates:
            entry = dict(entry)
            project_id = entry.pop("id", None)
            if not project_id:
                raise ProjectValidationError("Each project update must include an id")
            targets.append((UUID(str(project_id)), entry))

        try:
            projects = [await self._apply_update(pid, data) for pid, data in targets]
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ProjectConflictError("bulk update") from e
        except Exception:
            await self.session.rollback()
            raise

        for project_id, _ in targets:
            await evict_project(project_id)
        return projects

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project, then drop its cache entry (best-effort).

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        try:
            deleted = await self.project_repo.delete(project_id)
            if not deleted:
                raise ProjectNotFoundError(project_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project deleted", project_id=str(project_id))
        await evict_project(project_id)

    async def _apply_update(self, project_id: UUID, data: dict[str, Any]) -> ProjectTree:
        record = await self.project_repo.get_by_id(project_id)
        if record is None:
            raise ProjectNotFoundError(project_id)

        changes = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        if "name" in changes and not (changes["name"] or "").strip():
            raise ProjectValidationError("Project name cannot be empty")

        current = ProjectTree.from_record(record)
        fields = current.model_dump(exclude_unset=True)
        fields.update(changes)
        fields["updated_at"] = utc_now()
        project = canonicalize(ProjectTree.model_validate(fields))

        await self.project_repo.update(project_id, project.record_fields())
        logger.info(
            "Project updated",
            project_id=str(project_id),
            fields=sorted(changes),
        )
        return project
