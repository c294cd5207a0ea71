"""Tests for the create-or-merge decision against a fake gateway."""

from typing import Any
from uuid import UUID, uuid4

import pytest

from src.catalog.domain.tree import ProjectTree
from src.catalog.models import Project
from src.catalog.services.duplicate_resolver import (
    DuplicateResolver,
    ProjectCreated,
    ProjectMerged,
)
from src.catalog.services.tree_sorter import is_canonical
from tests.factories import ProjectFactory

pytestmark = pytest.mark.unit


class InMemoryGateway:
    """Dict-backed stand-in for ProjectRepository."""

    def __init__(self, *records: Project):
        self.records: dict[UUID, Project] = {r.id: r for r in records}
        self.calls: list[str] = []

    async def find_by_field(self, field: str, value: Any) -> Project | None:
        self.calls.append("find_by_field")
        return next((r for r in self.records.values() if getattr(r, field) == value), None)

    async def get_by_id(self, id: UUID) -> Project | None:
        return self.records.get(id)

    async def create(self, data: dict[str, Any]) -> UUID:
        self.calls.append("create")
        record = Project(id=uuid4(), **data)
        self.records[record.id] = record
        return record.id

    async def update(self, id: UUID, data: dict[str, Any]) -> Project | None:
        self.calls.append("update")
        record = self.records.get(id)
        if record is None:
            return None
        for field, value in data.items():
            setattr(record, field, value)
        return record

    async def delete(self, id: UUID) -> bool:
        return self.records.pop(id, None) is not None


def candidate(**kwargs) -> ProjectTree:
    return ProjectTree.model_validate({"name": "P", **kwargs})


async def test_creates_when_name_is_new():
    gateway = InMemoryGateway()
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(
        candidate(sqlServers=[{"name": "S2"}, {"name": "S1"}])
    )

    assert isinstance(result, ProjectCreated)
    assert result.is_merge is False
    assert result.project.id in gateway.records
    assert [s.name for s in result.project.sql_servers] == ["S1", "S2"]
    assert gateway.calls == ["find_by_field", "create"]


async def test_created_record_is_stored_sorted():
    gateway = InMemoryGateway()
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(
        candidate(sqlServers=[{"name": "b", "databases": [{"name": "y"}, {"name": "x"}]}])
    )

    record = gateway.records[result.project.id]
    assert record.sql_servers == [{"name": "b", "databases": [{"name": "x"}, {"name": "y"}]}]


async def test_merges_into_existing_with_same_name():
    existing = ProjectFactory.build(
        name="P",
        sql_servers=[{"name": "S1", "databases": [{"name": "D1", "tables": [{"name": "T1"}]}]}],
    )
    gateway = InMemoryGateway(existing)
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(
        candidate(
            sqlServers=[
                {"name": "S2"},
                {"name": "S1", "databases": [{"name": "D1", "tables": [{"name": "T2"}]}]},
            ]
        )
    )

    assert isinstance(result, ProjectMerged)
    assert result.is_merge is True
    assert result.project.id == existing.id
    assert len(gateway.records) == 1
    assert gateway.calls == ["find_by_field", "update"]
    assert gateway.records[existing.id].sql_servers == [
        {"name": "S1", "databases": [{"name": "D1", "tables": [{"name": "T1"}, {"name": "T2"}]}]},
        {"name": "S2"},
    ]
    assert is_canonical(result.project.sql_servers)


async def test_name_match_is_case_sensitive():
    gateway = InMemoryGateway(ProjectFactory.build(name="project"))
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(candidate(name="Project"))

    assert isinstance(result, ProjectCreated)
    assert len(gateway.records) == 2


async def test_merge_keeps_owner_and_created_at():
    existing = ProjectFactory.build(name="P", user_id="u1")
    created_at = existing.created_at
    gateway = InMemoryGateway(existing)
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(candidate(userId="u2"))

    assert result.project.user_id == "u1"
    assert result.project.created_at == created_at
    assert gateway.records[existing.id].user_id == "u1"


async def test_extra_project_fields_land_in_attributes():
    gateway = InMemoryGateway()
    resolver = DuplicateResolver(gateway)

    result = await resolver.resolve_and_persist(candidate(environment="staging"))

    assert gateway.records[result.project.id].attributes == {"environment": "staging"}


async def test_gateway_errors_propagate():
    class FailingGateway(InMemoryGateway):
        async def create(self, data: dict[str, Any]) -> UUID:
            raise ConnectionError("store unavailable")

    resolver = DuplicateResolver(FailingGateway())

    with pytest.raises(ConnectionError):
        await resolver.resolve_and_persist(candidate())
