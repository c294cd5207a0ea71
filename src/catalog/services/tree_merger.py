"""Deep merge of two project trees keyed by name.

Used when a project is submitted under a name that already exists. The stored
tree is the base; the submitted tree overlays it:

- scalar fields present on the incoming node replace the existing ones
- child collections are merged by name, recursively, down to tables
- existing children the submission does not mention are kept
- the merged project comes back sorted by name at every level

Neither input is mutated. Siblings sharing a name inside one incoming
collection are not collapsed: each of them is emitted and merged against the
same existing node.
"""

from datetime import datetime
from typing import Any, TypeVar

from src.catalog.domain.tree import NamedNode, ProjectTree
from src.catalog.models.base import utc_now
from src.catalog.services.tree_sorter import canonicalize, sort_by_name

NodeT = TypeVar("NodeT", bound=NamedNode)


def merge_nodes(existing: NodeT, incoming: NodeT) -> NodeT:
    """Merge two same-named nodes of one level.

    Incoming scalars win; child collections go through merge_children.
    """
    data: dict[str, Any] = existing.scalar_fields()
    data.update(incoming.scalar_fields())

    field = existing.children_field
    if field is not None:
        children = merge_children(existing.children, incoming.children)
        if children is not None:
            data[field] = children
        elif field in existing.model_fields_set or field in incoming.model_fields_set:
            data[field] = None

    return existing.model_validate(data)


def merge_children(
    existing: list[NodeT] | None,
    incoming: list[NodeT] | None,
) -> list[NodeT] | None:
    """Merge two sibling collections by name.

    When only one side has the collection it is returned unchanged. Otherwise
    the result and everything below it is sorted by name.
    """
    if existing is None:
        return incoming
    if incoming is None:
        return existing

    existing_by_name = {node.name: node for node in existing}
    incoming_names = {node.name for node in incoming}

    merged: list[NodeT] = []
    for node in incoming:
        match = existing_by_name.get(node.name)
        merged.append(node if match is None else merge_nodes(match, node))

    merged.extend(node for node in existing if node.name not in incoming_names)
    return sort_by_name(merged)


def merge_projects(
    existing: ProjectTree,
    incoming: ProjectTree,
    now: datetime | None = None,
) -> ProjectTree:
    """Merge a submitted project into the stored one with the same name.

    Args:
        existing: The stored project (its `id` and `created_at` are kept)
        incoming: The submitted project
        now: Merge timestamp; defaults to the current UTC time

    Returns:
        A new, fully sorted ProjectTree with `updated_at` set to the merge time
    """
    merged = canonicalize(merge_nodes(existing, incoming))
    return merged.model_copy(
        update={
            "id": existing.id,
            "user_id": existing.user_id if existing.user_id else incoming.user_id,
            "created_at": existing.created_at,
            "updated_at": now or utc_now(),
        }
    )
