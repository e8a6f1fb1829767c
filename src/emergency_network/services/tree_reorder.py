"""Reorder (move) operation for organization chart forests."""

import logging
from typing import Sequence

from .org_tree import OrganizationNode, iter_nodes

logger = logging.getLogger(__name__)

# Parent id that addresses the forest's root list
ROOT = "root"


class MoveError(Exception):
    """Base class for failed moves. The input forest is left untouched."""


class NotFoundError(MoveError):
    """Raised when a node or parent id is not present in the forest snapshot."""


class InvalidMoveError(MoveError):
    """Raised when the target index is outside the target sibling list."""


def _children_of(forest: list[OrganizationNode], parent_id: str) -> list[OrganizationNode]:
    """Return the mutable sibling list addressed by parent_id.

    Replicated subtrees repeat ids; the first match in pre-order wins.
    """
    if parent_id == ROOT:
        return forest
    for node in iter_nodes(forest):
        if node.id == parent_id:
            return node.children
    raise NotFoundError(f"Parent {parent_id!r} not found")


def move_node(
    forest: Sequence[OrganizationNode],
    node_id: str,
    from_parent_id: str,
    from_index: int,
    to_parent_id: str,
    to_index: int,
) -> list[OrganizationNode]:
    """
    Move one node to a new position and return the resulting forest.

    The node at from_index under from_parent_id is removed and reinserted at
    to_index under to_parent_id. to_index is interpreted against the target
    list after removal, so a move to the same (parent, index) is a no-op.

    Args:
        forest: Current forest snapshot (not modified)
        node_id: Id of the node being moved, checked against from_index
        from_parent_id: Source parent id, or ROOT
        from_index: Position of the node under the source parent
        to_parent_id: Target parent id, or ROOT
        to_index: Insert position under the target parent

    Returns:
        A new forest with the node moved

    Raises:
        NotFoundError: Stale node/parent ids, or target inside the moved subtree
        InvalidMoveError: to_index out of range
    """
    result = [node.clone() for node in forest]

    source = _children_of(result, from_parent_id)
    if not 0 <= from_index < len(source) or source[from_index].id != node_id:
        raise NotFoundError(
            f"Node {node_id!r} not found at index {from_index} under {from_parent_id!r}"
        )
    moved = source.pop(from_index)

    # The moved subtree is detached, so a target inside it is not found.
    target = _children_of(result, to_parent_id)
    if not 0 <= to_index <= len(target):
        raise InvalidMoveError(
            f"Index {to_index} out of range for {to_parent_id!r} "
            f"(0..{len(target)})"
        )
    target.insert(to_index, moved)

    logger.debug(
        f"Moved {node_id} from {from_parent_id}[{from_index}] "
        f"to {to_parent_id}[{to_index}]"
    )
    return result
