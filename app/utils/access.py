# app/utils/access.py
import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.config.settings import settings
from app.models.organization import Organization, OrganizationStaff
from app.models.user import User

logger = logging.getLogger(__name__)


class OrganizationAccess:
    """The caller's standing within one organization"""

    def __init__(self, organization: Organization, user: User, staff: Optional[OrganizationStaff]):
        self.organization = organization
        self.user = user
        self.staff = staff

    @property
    def is_owner(self) -> bool:
        return self.organization.owner_id == self.user.id

    @property
    def access_level(self) -> int:
        return self.staff.access_level if self.staff else 0

    @property
    def is_member(self) -> bool:
        return self.is_owner or self.staff is not None

    def can_manage(self) -> bool:
        """Goals, corporate tasks and staff edits"""
        return self.is_owner or self.access_level >= settings.ACCESS_LEVELS["manage"]

    def can_set_access_levels(self) -> bool:
        return self.is_owner or self.access_level >= settings.ACCESS_LEVELS["admin"]

    def can_invite(self) -> bool:
        if self.is_owner:
            return True
        return self.staff is not None and (self.staff.role or "").lower() in ("owner", "admin")


def get_staff_record(db: Session, organization_id: int, user_id: int) -> Optional[OrganizationStaff]:
    return db.query(OrganizationStaff).filter(
        OrganizationStaff.organization_id == organization_id,
        OrganizationStaff.user_id == user_id
    ).first()


def get_organization_access(db: Session, organization_id: int, user: User) -> OrganizationAccess:
    """Load the organization and the caller's staff row, 404 if the organization is missing"""
    organization = db.query(Organization).filter(Organization.id == organization_id).first()
    if not organization:
        raise HTTPException(status_code=404, detail="Organization not found")
    return OrganizationAccess(organization, user, get_staff_record(db, organization_id, user.id))


def require_member(db: Session, organization_id: int, user: User) -> OrganizationAccess:
    access = get_organization_access(db, organization_id, user)
    if not access.is_member:
        logger.warning("User %s denied access to organization %s", user.id, organization_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized - No access to this organization"
        )
    return access


def require_manager(db: Session, organization_id: int, user: User) -> OrganizationAccess:
    access = get_organization_access(db, organization_id, user)
    if not access.can_manage():
        logger.warning("User %s lacks manage rights in organization %s", user.id, organization_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized - Insufficient permissions"
        )
    return access
