"""Align a saved chart layout with the current staff roster.

A saved layout is restored verbatim by default. This pass is opt-in: it
removes nodes for staff who left the roster (promoting their children into
the freed slot), refreshes names and contacts, and places newcomers where
the tier-derived chart would have put them.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .org_tree import (
    OrganizationNode,
    StaffRecord,
    derived_parent_ids,
    iter_nodes,
)

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of reconcile_layout()."""

    forest: list[OrganizationNode]
    dropped_ids: list[str] = field(default_factory=list)
    added_ids: list[str] = field(default_factory=list)
    updated_ids: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.dropped_ids or self.added_ids or self.updated_ids)


def _prune(
    nodes: list[OrganizationNode],
    current: dict[str, StaffRecord],
    result: ReconcileResult,
) -> list[OrganizationNode]:
    kept: list[OrganizationNode] = []
    for node in nodes:
        children = _prune(node.children, current, result)
        record = current.get(node.id)
        if record is None:
            if node.id not in result.dropped_ids:
                result.dropped_ids.append(node.id)
            kept.extend(children)
            continue
        if record != node.staff and node.id not in result.updated_ids:
            result.updated_ids.append(node.id)
        kept.append(OrganizationNode(staff=record, children=children))
    return kept


def reconcile_layout(
    layout: Sequence[OrganizationNode], records: Sequence[StaffRecord]
) -> ReconcileResult:
    """
    Reconcile a saved layout against the roster.

    Args:
        layout: Saved forest (not modified)
        records: Current roster in input order

    Returns:
        ReconcileResult with the new forest and the ids that changed
    """
    current = {record.id: record for record in records}
    result = ReconcileResult(forest=[])
    result.forest = _prune(list(layout), current, result)

    placed = {node.id for node in iter_nodes(result.forest)}
    parents = derived_parent_ids(records)

    # Tier order, so a new department head is placed before its new staff
    missing = sorted(
        (r for r in records if r.id not in placed and r.id in parents),
        key=lambda r: r.position.rank,
    )
    for record in missing:
        hosts = [
            node
            for node in iter_nodes(result.forest)
            if node.id in parents[record.id]
        ]
        if hosts:
            for host in hosts:
                host.children.append(OrganizationNode(staff=record))
        else:
            result.forest.append(OrganizationNode(staff=record))
        result.added_ids.append(record.id)

    if result.changed:
        logger.info(
            f"Layout reconciled: {len(result.dropped_ids)} dropped, "
            f"{len(result.added_ids)} added, {len(result.updated_ids)} updated"
        )
    return result
