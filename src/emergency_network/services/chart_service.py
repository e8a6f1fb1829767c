"""Organization chart loading, moves and layout saves for one school.

A saved layout always wins over the tier-derived tree. Moves are applied to
whichever chart is current and the result becomes the saved layout.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .layout_reconciler import reconcile_layout
from .layout_store import delete_layout, get_layout, put_layout
from .org_tree import (
    LayoutFormatError,
    OrganizationNode,
    StaffRecord,
    build_organization_tree,
    find_orphans,
    forest_from_dicts,
    forest_to_dicts,
    iter_nodes,
)
from .staff_store import list_staff
from .tree_reorder import move_node

logger = logging.getLogger(__name__)

SOURCE_LAYOUT = "layout"
SOURCE_DERIVED = "derived"


@dataclass
class OrganizationChart:
    """A school's chart as served to clients."""

    forest: list[OrganizationNode]
    source: str
    orphans: list[StaffRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "tree": forest_to_dicts(self.forest),
            "orphans": [record.to_dict() for record in self.orphans],
        }


def get_organization_chart(school_id: str, reconcile: bool = False) -> OrganizationChart:
    """
    Load the chart for a school.

    Args:
        school_id: School to load
        reconcile: Align a saved layout with the current roster first

    Returns:
        OrganizationChart with source "layout" or "derived"
    """
    records = list_staff(school_id)
    orphans = find_orphans(records)

    layout = get_layout(school_id)
    if layout is not None:
        if reconcile:
            layout = reconcile_layout(layout, records).forest
        return OrganizationChart(forest=layout, source=SOURCE_LAYOUT, orphans=orphans)

    return OrganizationChart(
        forest=build_organization_tree(records),
        source=SOURCE_DERIVED,
        orphans=orphans,
    )


def move_and_save(
    school_id: str,
    node_id: str,
    from_parent_id: str,
    from_index: int,
    to_parent_id: str,
    to_index: int,
    reconcile: bool = False,
) -> OrganizationChart:
    """Apply a move to the current chart and persist the result as the layout."""
    chart = get_organization_chart(school_id, reconcile=reconcile)
    forest = move_node(
        chart.forest, node_id, from_parent_id, from_index, to_parent_id, to_index
    )
    put_layout(school_id, forest)
    logger.info(f"School {school_id}: moved {node_id} to {to_parent_id}[{to_index}]")
    return OrganizationChart(forest=forest, source=SOURCE_LAYOUT, orphans=chart.orphans)


def save_layout(school_id: str, payload: Any) -> OrganizationChart:
    """
    Validate and persist a client-supplied forest.

    Raises:
        LayoutFormatError: Malformed payload or ids not on the roster
    """
    forest = forest_from_dicts(payload)
    records = list_staff(school_id)
    known = {record.id for record in records}
    unknown = sorted({node.id for node in iter_nodes(forest)} - known)
    if unknown:
        raise LayoutFormatError(f"Layout references unknown staff ids: {', '.join(unknown)}")

    put_layout(school_id, forest)
    return OrganizationChart(
        forest=forest, source=SOURCE_LAYOUT, orphans=find_orphans(records)
    )


def reset_layout(school_id: str) -> OrganizationChart:
    """Drop the saved layout and return the tier-derived chart."""
    delete_layout(school_id)
    return get_organization_chart(school_id)
