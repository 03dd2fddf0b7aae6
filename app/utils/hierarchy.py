# app/utils/hierarchy.py
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple
from sqlalchemy.orm import Session
from app.models.organization import OrganizationStaff


class HierarchyNode:
    """A staff member plus the members reporting directly to them"""

    __slots__ = ("staff", "children")

    def __init__(self, staff):
        self.staff = staff
        self.children: List["HierarchyNode"] = []

    @property
    def id(self):
        return self.staff.id

    def __repr__(self):
        return f"HierarchyNode(id={self.id!r}, children={[c.id for c in self.children]!r})"


def build_hierarchy(staff_list: Iterable) -> List[HierarchyNode]:
    """Turn a flat list of staff records into a forest keyed on ``reports_to``.

    A record whose ``reports_to`` is empty, or points at an id that is not in
    the list, becomes a root. Roots and children keep their input order.
    Records caught in a ``reports_to`` cycle are never reachable from a root
    and so do not appear in the result; see ``find_unreachable``.
    """
    staff_list = list(staff_list)
    index: Dict[object, HierarchyNode] = {}
    for staff in staff_list:
        index[staff.id] = HierarchyNode(staff)

    roots = []
    for staff in staff_list:
        node = index[staff.id]
        parent = index.get(staff.reports_to) if staff.reports_to is not None else None
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots


def iter_hierarchy(roots: Iterable[HierarchyNode]) -> Iterator[Tuple[HierarchyNode, int]]:
    """Depth-first pre-order walk yielding (node, level), roots at level 0"""
    stack = [(node, 0) for node in reversed(list(roots))]
    while stack:
        node, level = stack.pop()
        yield node, level
        for child in reversed(node.children):
            stack.append((child, level + 1))


def find_unreachable(staff_list: Iterable, roots: Iterable[HierarchyNode]) -> List:
    """Ids of staff records missing from the forest (cycle members and their reports)"""
    reachable = {node.id for node, _ in iter_hierarchy(roots)}
    return [staff.id for staff in staff_list if staff.id not in reachable]


class HierarchyManager:
    """Utility class for reporting-line queries within one organization"""

    def __init__(self, db: Session):
        self.db = db

    def get_staff(self, staff_id: int) -> Optional[OrganizationStaff]:
        return self.db.query(OrganizationStaff).filter(OrganizationStaff.id == staff_id).first()

    def get_organization_staff(self, organization_id: int) -> List[OrganizationStaff]:
        return self.db.query(OrganizationStaff).filter(
            OrganizationStaff.organization_id == organization_id
        ).order_by(OrganizationStaff.access_level.desc(), OrganizationStaff.id).all()

    def get_direct_reports(self, staff_id: int) -> List[OrganizationStaff]:
        """Get only the members reporting directly to staff_id"""
        return self.db.query(OrganizationStaff).filter(
            OrganizationStaff.reports_to == staff_id
        ).order_by(OrganizationStaff.id).all()

    def get_all_reports(self, staff_id: int) -> List[OrganizationStaff]:
        """Get all direct and indirect reports of staff_id"""
        reports = []
        visited: Set[int] = set()

        def collect_reports(manager_id: int):
            if manager_id in visited:
                return
            visited.add(manager_id)

            for report in self.get_direct_reports(manager_id):
                if report.id in visited:
                    continue
                reports.append(report)
                collect_reports(report.id)

        collect_reports(staff_id)
        return reports

    def get_management_chain(self, staff_id: int) -> List[OrganizationStaff]:
        """Managers from staff_id's direct manager up to the top of the chart"""
        chain = []
        visited = {staff_id}
        current = self.get_staff(staff_id)

        while current and current.reports_to and current.reports_to not in visited:
            manager = self.get_staff(current.reports_to)
            if not manager:
                break
            chain.append(manager)
            visited.add(manager.id)
            current = manager

        return chain

    def get_level(self, staff_id: int) -> int:
        """Depth in the org chart (0 = top level)"""
        return len(self.get_management_chain(staff_id))

    def would_create_cycle(self, staff_id: int, manager_id: Optional[int]) -> bool:
        """True if making manager_id the manager of staff_id closes a reporting loop"""
        if manager_id is None:
            return False
        if manager_id == staff_id:
            return True
        return any(report.id == manager_id for report in self.get_all_reports(staff_id))

    def get_org_chart(self, organization_id: int) -> dict:
        staff = self.get_organization_staff(organization_id)
        roots = build_hierarchy(staff)
        return {
            "roots": roots,
            "unreachable": find_unreachable(staff, roots),
            "total": len(staff),
        }
