"""Services package for Emergency Network."""

from .org_tree import (
    LayoutFormatError,
    OrganizationNode,
    StaffRecord,
    build_organization_tree,
    count_nodes,
    find_orphans,
    forest_from_dicts,
    forest_to_dicts,
    iter_nodes,
)
from .tree_reorder import ROOT, InvalidMoveError, MoveError, NotFoundError, move_node
from .layout_reconciler import ReconcileResult, reconcile_layout

__all__ = [
    # Tree model
    "OrganizationNode",
    "StaffRecord",
    "LayoutFormatError",
    "build_organization_tree",
    "find_orphans",
    "iter_nodes",
    "count_nodes",
    "forest_to_dicts",
    "forest_from_dicts",
    # Reorder
    "ROOT",
    "MoveError",
    "NotFoundError",
    "InvalidMoveError",
    "move_node",
    # Reconciliation
    "ReconcileResult",
    "reconcile_layout",
]
