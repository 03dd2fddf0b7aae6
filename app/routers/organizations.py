# app/routers/organizations.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
from app.config.settings import settings
from app.database import get_db
from app.models.organization import Organization, OrganizationStaff
from app.models.user import User
from app.routers.organization_staff import serialize_staff, validate_role
from app.schemas.organization import OrganizationCreate, OrganizationOut, StaffInvite
from app.schemas.staff import StaffOut
from app.utils.access import get_organization_access, require_member
from app.utils.auth import get_current_user, require_platform_admin
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/", response_model=List[OrganizationOut])
def get_my_organizations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Organizations the caller owns or belongs to, newest first"""
    member_of = db.query(OrganizationStaff.organization_id).filter(
        OrganizationStaff.user_id == current_user.id
    )
    return db.query(Organization).filter(
        or_(Organization.owner_id == current_user.id, Organization.id.in_(member_of))
    ).order_by(Organization.created_at.desc(), Organization.id.desc()).all()

@router.post("/", response_model=OrganizationOut, status_code=status.HTTP_201_CREATED)
def create_organization(
    org_data: OrganizationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_platform_admin)
):
    """Create an organization - platform admins only"""
    if not org_data.name:
        raise HTTPException(status_code=400, detail="Organization name is required")

    owner_id = org_data.owner_id or current_user.id
    owner = db.query(User).filter(User.id == owner_id).first()
    if not owner:
        raise HTTPException(status_code=400, detail="Owner not found")

    organization = Organization(
        name=org_data.name,
        description=org_data.description,
        owner_id=owner_id,
        subscription_plan=org_data.subscription_plan,
    )
    db.add(organization)
    db.flush()

    # The owner sits at the top of the org chart with full access
    db.add(OrganizationStaff(
        organization_id=organization.id,
        user_id=owner_id,
        position="Owner",
        role="Owner",
        access_level=settings.ACCESS_LEVELS["max"],
        status="Active",
    ))
    commit_or_500(db, "Failed to create organization")
    db.refresh(organization)

    logger.info("Organization %s (%s) created by %s", organization.id, organization.name, current_user.id)
    return organization

@router.get("/{organization_id}", response_model=OrganizationOut)
def get_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return require_member(db, organization_id, current_user).organization

@router.get("/{organization_id}/staff", response_model=List[StaffOut])
def get_staff_with_users(
    organization_id: int,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Organization members, optionally filtered by name, email, role or position"""
    require_member(db, organization_id, current_user)

    members = db.query(OrganizationStaff).filter(
        OrganizationStaff.organization_id == organization_id
    ).order_by(OrganizationStaff.created_at.desc(), OrganizationStaff.id.desc()).all()

    if search:
        term = search.lower()
        members = [
            m for m in members
            if term in (m.user.name if m.user else "").lower()
            or term in (m.user.email if m.user else "").lower()
            or term in (m.role or "").lower()
            or term in (m.position or "").lower()
        ]

    return [serialize_staff(m) for m in members]

@router.post("/{organization_id}/staff", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
def invite_staff(
    organization_id: int,
    invite: StaffInvite,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Invite an existing user by email; they join with status 'pending'"""
    if not invite.email or not invite.role:
        raise HTTPException(status_code=400, detail="Organization ID, email, and role are required")
    validate_role(invite.role)

    access = get_organization_access(db, organization_id, current_user)
    if not access.can_invite():
        raise HTTPException(status_code=403, detail="Unauthorized - Admin access required")

    user = db.query(User).filter(User.email == invite.email).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    existing = db.query(OrganizationStaff).filter(
        OrganizationStaff.organization_id == organization_id,
        OrganizationStaff.user_id == user.id
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="User is already a member of this organization")

    member = OrganizationStaff(
        organization_id=organization_id,
        user_id=user.id,
        role=invite.role,
        access_level=settings.ACCESS_LEVELS["default"],
        status=invite.status or "pending",
    )
    db.add(member)
    commit_or_500(db, "Failed to add staff member")
    db.refresh(member)

    logger.info("User %s invited to organization %s by %s", user.id, organization_id, current_user.id)
    return serialize_staff(member)
