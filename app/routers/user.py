# app/routers/user.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserOut, UserSummary, UserRoleUpdate
from app.utils.auth import get_current_user, require_platform_admin
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)

PLATFORM_ROLES = ["user", "admin"]

@router.get("/me", response_model=UserOut)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user

@router.get("/search", response_model=List[UserSummary])
def search_users(
    q: str = "",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Find active users by name or email, e.g. when adding staff"""
    term = q.strip()
    if not term:
        return []

    pattern = f"%{term}%"
    return db.query(User).filter(
        User.is_active == True,
        or_(User.name.ilike(pattern), User.email.ilike(pattern))
    ).order_by(User.name).limit(20).all()

@router.put("/{user_id}/role", response_model=UserOut)
def update_user_role(
    user_id: int,
    role_update: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_platform_admin)
):
    """Change a user's platform role - platform admins only"""
    if role_update.role not in PLATFORM_ROLES:
        raise HTTPException(status_code=400, detail=f"Role must be one of: {', '.join(PLATFORM_ROLES)}")

    db_user = db.query(User).filter(User.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    db_user.role = role_update.role
    commit_or_500(db, "Failed to update user role")
    db.refresh(db_user)
    logger.info("User %s role set to %s by %s", db_user.id, db_user.role, current_user.id)
    return db_user
