"""Organization tree construction for the emergency contact chart.

Staff records carry no parent pointers. The hierarchy is derived from the
position tier and the department label:

    principal -> vice_principal -> department_head -> staff

Department heads adopt the staff of their own department. Every
vice-principal adopts every department head, and each principal adopts the
vice-principals (or the department heads directly when there are none).
When a tier is empty the forest is rooted at the next tier down.

Subtrees that appear under more than one parent are cloned per parent, so
reordering one copy never changes another. Staff whose department has no
head are dropped from the tree; find_orphans() reports them.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from ..models.staff import StaffPosition


class LayoutFormatError(ValueError):
    """Raised when a serialized forest does not have the expected shape."""


@dataclass(frozen=True)
class StaffRecord:
    """Immutable view of one roster row."""

    id: str
    name: str
    department: str
    position: StaffPosition
    contact: str

    @classmethod
    def from_model(cls, member) -> "StaffRecord":
        """Build a record from a StaffMember row."""
        return cls(
            id=member.id,
            name=member.name,
            department=member.department,
            position=member.position,
            contact=member.contact,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "department": self.department,
            "position": self.position.value,
            "contact": self.contact,
        }


@dataclass
class OrganizationNode:
    """A chart node wrapping exactly one staff record."""

    staff: StaffRecord
    children: list["OrganizationNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.staff.id

    def clone(self) -> "OrganizationNode":
        """Copy this node and its whole subtree. Records are immutable and shared."""
        return OrganizationNode(
            staff=self.staff,
            children=[child.clone() for child in self.children],
        )


def _partition(records: Sequence[StaffRecord]) -> dict[StaffPosition, list[StaffRecord]]:
    """Stable partition of records into tier buckets."""
    buckets: dict[StaffPosition, list[StaffRecord]] = {tier: [] for tier in StaffPosition}
    for record in records:
        buckets[record.position].append(record)
    return buckets


def _build_head_nodes(
    heads: list[StaffRecord], staff: list[StaffRecord]
) -> list[OrganizationNode]:
    nodes = []
    for head in heads:
        members = [s for s in staff if s.department == head.department]
        nodes.append(
            OrganizationNode(
                staff=head,
                children=[OrganizationNode(staff=m) for m in members],
            )
        )
    return nodes


def _clone_all(nodes: list[OrganizationNode]) -> list[OrganizationNode]:
    return [node.clone() for node in nodes]


def build_organization_tree(records: Sequence[StaffRecord]) -> list[OrganizationNode]:
    """
    Build the chart forest from a flat roster.

    Never raises for missing tiers or unmatched departments. The result
    preserves input order within every sibling list.

    Args:
        records: Staff records in roster order

    Returns:
        List of root nodes (empty for an empty roster)
    """
    buckets = _partition(records)
    head_nodes = _build_head_nodes(
        buckets[StaffPosition.DEPARTMENT_HEAD], buckets[StaffPosition.STAFF]
    )

    vice_nodes = [
        OrganizationNode(staff=vice, children=_clone_all(head_nodes))
        for vice in buckets[StaffPosition.VICE_PRINCIPAL]
    ]

    principals = buckets[StaffPosition.PRINCIPAL]
    if principals:
        below = vice_nodes if vice_nodes else head_nodes
        return [
            OrganizationNode(staff=principal, children=_clone_all(below))
            for principal in principals
        ]
    if vice_nodes:
        return vice_nodes
    return head_nodes


def find_orphans(records: Sequence[StaffRecord]) -> list[StaffRecord]:
    """Return the staff records that build_organization_tree() leaves out."""
    head_departments = {
        r.department for r in records if r.position == StaffPosition.DEPARTMENT_HEAD
    }
    return [
        r for r in records
        if r.position == StaffPosition.STAFF and r.department not in head_departments
    ]


def derived_parent_ids(records: Sequence[StaffRecord]) -> dict[str, list[str | None]]:
    """Map each placed record id to every distinct parent id it has in the derived tree.

    Roots map to [None]. Parents are listed in pre-order of first appearance.
    """
    parents: dict[str, list[str | None]] = {}

    def walk(nodes: list[OrganizationNode], parent_id: str | None) -> None:
        for node in nodes:
            seen = parents.setdefault(node.id, [])
            if parent_id not in seen:
                seen.append(parent_id)
            walk(node.children, node.id)

    walk(build_organization_tree(records), None)
    return parents


def iter_nodes(forest: Sequence[OrganizationNode]) -> Iterator[OrganizationNode]:
    """Walk the forest in pre-order."""
    for node in forest:
        yield node
        yield from iter_nodes(node.children)


def count_nodes(forest: Sequence[OrganizationNode]) -> int:
    return sum(1 for _ in iter_nodes(forest))


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

_STAFF_FIELDS = ("id", "name", "department", "position", "contact")


def node_to_dict(node: OrganizationNode) -> dict:
    return {
        "id": node.id,
        "staff": node.staff.to_dict(),
        "children": [node_to_dict(child) for child in node.children],
    }


def forest_to_dicts(forest: Sequence[OrganizationNode]) -> list[dict]:
    return [node_to_dict(node) for node in forest]


def _staff_from_dict(data: Any) -> StaffRecord:
    if not isinstance(data, dict):
        raise LayoutFormatError("Node 'staff' must be an object")
    missing = [key for key in _STAFF_FIELDS if not isinstance(data.get(key), str)]
    if missing:
        raise LayoutFormatError(f"Staff entry is missing string fields: {', '.join(missing)}")
    try:
        position = StaffPosition(data["position"])
    except ValueError:
        raise LayoutFormatError(f"Unknown position: {data['position']!r}")
    return StaffRecord(
        id=data["id"],
        name=data["name"],
        department=data["department"],
        position=position,
        contact=data["contact"],
    )


def node_from_dict(data: Any) -> OrganizationNode:
    """
    Rebuild a node (and its subtree) from its serialized form.

    Raises:
        LayoutFormatError: If the payload does not match the node shape
    """
    if not isinstance(data, dict):
        raise LayoutFormatError("Node must be an object")
    staff = _staff_from_dict(data.get("staff"))
    if data.get("id", staff.id) != staff.id:
        raise LayoutFormatError(
            f"Node id {data.get('id')!r} does not match staff id {staff.id!r}"
        )
    children = data.get("children", [])
    if not isinstance(children, list):
        raise LayoutFormatError("Node 'children' must be a list")
    return OrganizationNode(
        staff=staff,
        children=[node_from_dict(child) for child in children],
    )


def forest_from_dicts(data: Any) -> list[OrganizationNode]:
    if not isinstance(data, list):
        raise LayoutFormatError("Layout must be a list of root nodes")
    return [node_from_dict(item) for item in data]
