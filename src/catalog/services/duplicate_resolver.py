"""Create-or-merge decision for submitted projects."""

from dataclasses import dataclass
from typing import Literal

from src.catalog.core.logging import get_logger
from src.catalog.domain.tree import ProjectTree
from src.catalog.repositories.project import ProjectGateway
from src.catalog.services.tree_merger import merge_projects
from src.catalog.services.tree_sorter import canonicalize

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectCreated:
    """No project had the submitted name; a new record was inserted."""

    project: ProjectTree
    is_merge: Literal[False] = False


@dataclass(frozen=True)
class ProjectMerged:
    """A project with the submitted name existed and absorbed the submission."""

    project: ProjectTree
    is_merge: Literal[True] = True


type ResolveResult = ProjectCreated | ProjectMerged


class DuplicateResolver:
    """Persists a candidate project, merging it into a same-named one if present.

    The lookup and the write are two separate gateway calls with nothing
    guarding the gap between them. Commit is left to the caller.
    """

    def __init__(self, gateway: ProjectGateway):
        self.gateway = gateway

    async def resolve_and_persist(self, candidate: ProjectTree) -> ResolveResult:
        existing_record = await self.gateway.find_by_field("name", candidate.name)

        if existing_record is None:
            project = canonicalize(candidate)
            project_id = await self.gateway.create(project.record_fields())
            project = project.model_copy(update={"id": project_id})
            logger.info("Project created", project_id=str(project_id), project_name=project.name)
            return ProjectCreated(project)

        existing = ProjectTree.from_record(existing_record)
        merged = merge_projects(existing, candidate)
        await self.gateway.update(existing_record.id, merged.record_fields())
        logger.info(
            "Project merged into existing record",
            project_id=str(existing_record.id),
            project_name=merged.name,
        )
        return ProjectMerged(merged)
