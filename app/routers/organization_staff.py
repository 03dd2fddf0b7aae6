# app/routers/organization_staff.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.config.settings import settings
from app.database import get_db
from app.models.organization import OrganizationStaff
from app.models.user import User
from app.schemas.hierarchy import OrgChart
from app.schemas.staff import StaffCreate, StaffUpdate, StaffOut, ManagerUpdate
from app.utils.access import OrganizationAccess, require_member, require_manager
from app.utils.auth import get_current_user
from app.utils.hierarchy import HierarchyManager, HierarchyNode
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)


def _user_summary(user: Optional[User]) -> Optional[dict]:
    if not user:
        return None
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "avatar_url": user.avatar_url,
    }


def serialize_staff(staff: OrganizationStaff) -> dict:
    """Staff row plus the member's user info and their manager's user info"""
    manager = None
    if staff.manager is not None and staff.manager.user is not None:
        manager = _user_summary(staff.manager.user)
        # the manager is addressed by staff id, the same value as reports_to
        manager["id"] = staff.manager.id

    return {
        "id": staff.id,
        "organization_id": staff.organization_id,
        "user_id": staff.user_id,
        "position": staff.position,
        "department": staff.department,
        "role": staff.role,
        "access_level": staff.access_level,
        "status": staff.status,
        "hire_date": staff.hire_date,
        "salary_range": staff.salary_range,
        "reports_to": staff.reports_to,
        "created_at": staff.created_at,
        "updated_at": staff.updated_at,
        "user": _user_summary(staff.user),
        "manager": manager,
    }


def _node_entry(staff: OrganizationStaff, level: int) -> dict:
    return {
        "id": staff.id,
        "user_id": staff.user_id,
        "position": staff.position,
        "department": staff.department,
        "role": staff.role,
        "access_level": staff.access_level,
        "status": staff.status,
        "reports_to": staff.reports_to,
        "level": level,
        "user": _user_summary(staff.user),
        "children": [],
    }


def serialize_tree(roots: List[HierarchyNode]) -> List[dict]:
    """Nested org-chart payload, built with an explicit stack so chain depth is unbounded"""
    serialized = []
    stack = [(root, 0, serialized) for root in reversed(roots)]
    while stack:
        node, level, siblings = stack.pop()
        entry = _node_entry(node.staff, level)
        siblings.append(entry)
        for child in reversed(node.children):
            stack.append((child, level + 1, entry["children"]))
    return serialized


def _require_organization_id(organization_id: Optional[int]) -> int:
    if not organization_id:
        raise HTTPException(status_code=400, detail="Organization ID is required")
    return organization_id


def _get_staff_or_404(db: Session, staff_id: int) -> OrganizationStaff:
    staff = db.query(OrganizationStaff).filter(OrganizationStaff.id == staff_id).first()
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


def _validate_access_level(access_level: Optional[int]):
    if access_level is not None and not settings.is_valid_access_level(access_level):
        raise HTTPException(
            status_code=400,
            detail=f"Access level must be between {settings.ACCESS_LEVELS['min']} and {settings.ACCESS_LEVELS['max']}"
        )


def validate_role(role: Optional[str]):
    if role is not None and not settings.is_valid_staff_role(role):
        raise HTTPException(status_code=400, detail=f"Role must be one of: {', '.join(settings.STAFF_ROLES)}")


def _validate_manager(db: Session, staff: OrganizationStaff, manager_id: Optional[int]):
    """Reject a reports_to value that would not leave the org chart a forest"""
    if manager_id is None:
        return

    hierarchy = HierarchyManager(db)
    if manager_id == staff.id:
        raise HTTPException(status_code=400, detail="Staff member cannot report to themselves")

    manager = hierarchy.get_staff(manager_id)
    if not manager or manager.organization_id != staff.organization_id:
        raise HTTPException(status_code=400, detail="Manager not found in this organization")

    if hierarchy.would_create_cycle(staff.id, manager_id):
        raise HTTPException(
            status_code=400,
            detail="Manager cannot be one of the staff member's own reports"
        )


@router.get("/", response_model=List[StaffOut])
def get_organization_staff(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Staff of one organization, highest access level first"""
    organization_id = _require_organization_id(organization_id)
    require_member(db, organization_id, current_user)

    staff = HierarchyManager(db).get_organization_staff(organization_id)
    return [serialize_staff(member) for member in staff]


@router.get("/hierarchy", response_model=OrgChart)
def get_organization_hierarchy(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Org chart built from the reports_to lines of the current staff list"""
    organization_id = _require_organization_id(organization_id)
    require_member(db, organization_id, current_user)

    chart = HierarchyManager(db).get_org_chart(organization_id)
    if chart["unreachable"]:
        logger.warning(
            "Organization %s has staff outside the org chart (reporting cycle): %s",
            organization_id, chart["unreachable"]
        )

    return {
        "organization_id": organization_id,
        "total": chart["total"],
        "roots": serialize_tree(chart["roots"]),
        "unreachable": chart["unreachable"],
    }


@router.post("/", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
def add_staff(
    staff_data: StaffCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a user to an organization's staff"""
    if not staff_data.organization_id or not staff_data.user_id or not staff_data.position or not staff_data.role:
        raise HTTPException(status_code=400, detail="Missing required fields")

    access = require_manager(db, staff_data.organization_id, current_user)
    validate_role(staff_data.role)
    _validate_access_level(staff_data.access_level)
    if staff_data.access_level is not None and not access.can_set_access_levels():
        raise HTTPException(status_code=403, detail="Only the owner or level 5 staff can set access levels")

    user = db.query(User).filter(User.id == staff_data.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    existing = db.query(OrganizationStaff).filter(
        OrganizationStaff.organization_id == staff_data.organization_id,
        OrganizationStaff.user_id == staff_data.user_id
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="User is already a member of this organization")

    if staff_data.reports_to is not None:
        manager = HierarchyManager(db).get_staff(staff_data.reports_to)
        if not manager or manager.organization_id != staff_data.organization_id:
            raise HTTPException(status_code=400, detail="Manager not found in this organization")

    db_staff = OrganizationStaff(
        organization_id=staff_data.organization_id,
        user_id=staff_data.user_id,
        position=staff_data.position,
        department=staff_data.department,
        role=staff_data.role,
        access_level=staff_data.access_level or settings.ACCESS_LEVELS["default"],
        status=staff_data.status or "Active",
        hire_date=staff_data.hire_date,
        salary_range=staff_data.salary_range,
        reports_to=staff_data.reports_to,
    )
    db.add(db_staff)
    commit_or_500(db, "Failed to add staff")
    db.refresh(db_staff)

    logger.info("User %s added to organization %s as %s", db_staff.user_id, db_staff.organization_id, db_staff.role)
    return serialize_staff(db_staff)


def _apply_staff_update(db: Session, db_staff: OrganizationStaff, update_data: dict, access: OrganizationAccess):
    new_level = update_data.get("access_level")
    if new_level is not None and new_level != db_staff.access_level:
        _validate_access_level(new_level)
        if not access.can_set_access_levels():
            raise HTTPException(status_code=403, detail="Only the owner or level 5 staff can change access levels")

    validate_role(update_data.get("role"))

    if "reports_to" in update_data:
        _validate_manager(db, db_staff, update_data["reports_to"])

    for field, value in update_data.items():
        if value is None and field in ("role", "access_level", "status"):
            continue
        setattr(db_staff, field, value)


@router.put("/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: int,
    staff_update: StaffUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Partial update of a staff member, including their manager"""
    db_staff = _get_staff_or_404(db, staff_id)
    access = require_manager(db, db_staff.organization_id, current_user)

    update_data = staff_update.model_dump(exclude_unset=True)
    previous_manager = db_staff.reports_to
    _apply_staff_update(db, db_staff, update_data, access)

    commit_or_500(db, "Failed to update staff")
    db.refresh(db_staff)

    if db_staff.reports_to != previous_manager:
        logger.info("Staff %s now reports to %s (was %s)", db_staff.id, db_staff.reports_to, previous_manager)
    return serialize_staff(db_staff)


@router.put("/{staff_id}/manager", response_model=StaffOut)
def set_manager(
    staff_id: int,
    manager_update: ManagerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Set or clear (null) who a staff member reports to"""
    db_staff = _get_staff_or_404(db, staff_id)
    access = require_manager(db, db_staff.organization_id, current_user)

    previous_manager = db_staff.reports_to
    _apply_staff_update(db, db_staff, {"reports_to": manager_update.reports_to}, access)

    commit_or_500(db, "Failed to update manager")
    db.refresh(db_staff)

    logger.info("Staff %s now reports to %s (was %s)", db_staff.id, db_staff.reports_to, previous_manager)
    return serialize_staff(db_staff)


@router.delete("/{staff_id}")
def delete_staff(
    staff_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a staff member; their direct reports move to the top level"""
    db_staff = _get_staff_or_404(db, staff_id)
    access = require_manager(db, db_staff.organization_id, current_user)

    if access.staff is not None and access.staff.id == db_staff.id:
        raise HTTPException(status_code=400, detail="You cannot remove yourself from the organization")

    # SQLite does not enforce ON DELETE SET NULL unless foreign keys are switched on
    for report in HierarchyManager(db).get_direct_reports(db_staff.id):
        report.reports_to = None

    db.delete(db_staff)
    commit_or_500(db, "Failed to delete staff")

    logger.info("Staff %s removed from organization %s", staff_id, access.organization.id)
    return {"success": True}
