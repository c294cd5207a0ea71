"""Project tree types: project → SQL servers → databases → tables.

Every level is identified by `name` within its parent. Besides `name` and its
child collection, a node carries an open set of extra attributes (pydantic
`extra="allow"`), which is how client-defined scalar fields survive a round
trip. Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TREE_MODEL_CONFIG = ConfigDict(
    extra="allow",
    alias_generator=to_camel,
    populate_by_name=True,
)


class NamedNode(BaseModel):
    """A tree node identified by name among its siblings."""

    model_config = TREE_MODEL_CONFIG

    # Name of the nested collection field, None for leaves
    children_field: ClassVar[str | None] = None

    name: str

    @property
    def children(self) -> list["NamedNode"] | None:
        if self.children_field is None:
            return None
        return getattr(self, self.children_field)

    def scalar_fields(self) -> dict[str, Any]:
        """Fields explicitly present on this node, without the child collection."""
        exclude = {self.children_field} if self.children_field else None
        return self.model_dump(exclude_unset=True, exclude=exclude)

    def with_children(self, children: list[Any] | None) -> "NamedNode":
        """Return a copy of this node with its child collection replaced."""
        if self.children_field is None:
            return self
        data = self.scalar_fields()
        if children is not None or self.children_field in self.model_fields_set:
            data[self.children_field] = children
        return self.model_validate(data)


class TableNode(NamedNode):
    pass


class DatabaseNode(NamedNode):
    children_field: ClassVar[str | None] = "tables"

    tables: list[TableNode] | None = None


class SqlServerNode(NamedNode):
    children_field: ClassVar[str | None] = "databases"

    databases: list[DatabaseNode] | None = None


class ProjectTree(NamedNode):
    """A whole project as submitted by clients and returned by the API."""

    children_field: ClassVar[str | None] = "sql_servers"

    # Columns of the projects table; everything else lives in `attributes`
    record_columns: ClassVar[tuple[str, ...]] = (
        "id",
        "name",
        "user_id",
        "description",
        "is_active",
        "sql_servers",
        "created_at",
        "updated_at",
    )

    id: UUID | None = None
    user_id: str | None = None
    description: str | None = None
    is_active: bool | None = None
    sql_servers: list[SqlServerNode] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: Any) -> "ProjectTree":
        """Build a tree from a stored project row."""
        data: dict[str, Any] = dict(record.attributes or {})
        data.update({column: getattr(record, column) for column in cls.record_columns})
        return cls.model_validate(data)

    def record_fields(self) -> dict[str, Any]:
        """Column values for persisting this tree (`id` excluded)."""
        fields: dict[str, Any] = {
            "name": self.name,
            "user_id": self.user_id,
            "description": self.description,
            "is_active": self.is_active,
            "sql_servers": (
                [server.model_dump(mode="json", exclude_unset=True) for server in self.sql_servers]
                if self.sql_servers is not None
                else None
            ),
            "attributes": dict(self.model_extra or {}),
        }
        if self.created_at is not None:
            fields["created_at"] = self.created_at
        if self.updated_at is not None:
            fields["updated_at"] = self.updated_at
        return fields
