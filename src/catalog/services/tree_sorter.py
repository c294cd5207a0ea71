"""Canonical ordering of project trees.

Every collection of named nodes is ordered ascending by `name` using plain
codepoint comparison (no locale collation). Sorting is stable, so nodes that
share a name keep their relative order.
"""

from collections.abc import Sequence
from typing import TypeVar

from src.catalog.domain.tree import NamedNode, ProjectTree

NodeT = TypeVar("NodeT", bound=NamedNode)


def _name_key(node: NamedNode) -> str:
    return node.name


def sort_by_name(nodes: Sequence[NodeT] | None, recursive: bool = True) -> list[NodeT] | None:
    """Return a new list of `nodes` sorted by name.

    Args:
        nodes: Sibling nodes, or None when the collection is absent
        recursive: Also sort every nested collection below these nodes

    Returns:
        The sorted list, or None if `nodes` is None
    """
    if nodes is None:
        return None

    if recursive:
        nodes = [_sort_children(node) for node in nodes]
    return sorted(nodes, key=_name_key)


def _sort_children(node: NodeT) -> NodeT:
    children = node.children
    if children is None:
        return node
    return node.with_children(sort_by_name(children))  # type: ignore[return-value]


def canonicalize(project: ProjectTree) -> ProjectTree:
    """Return `project` with its servers, databases and tables sorted by name."""
    return _sort_children(project)


def is_canonical(nodes: Sequence[NamedNode] | None) -> bool:
    """True if `nodes` and every nested collection below them are sorted by name."""
    if not nodes:
        return True
    names = [node.name for node in nodes]
    if names != sorted(names):
        return False
    return all(is_canonical(node.children) for node in nodes)
