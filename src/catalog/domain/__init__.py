"""Project tree domain types."""

from src.catalog.domain.tree import (
    DatabaseNode,
    NamedNode,
    ProjectTree,
    SqlServerNode,
    TableNode,
)

__all__ = [
    "DatabaseNode",
    "NamedNode",
    "ProjectTree",
    "SqlServerNode",
    "TableNode",
]
