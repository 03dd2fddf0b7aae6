# app/routers/organization_goals.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.goal import OrganizationGoal, GOAL_STATUSES, PRIORITIES
from app.models.organization import OrganizationStaff
from app.models.project import Project
from app.models.user import User
from app.schemas.goal import GoalCreate, GoalUpdate, GoalOut
from app.utils.access import require_member, require_manager
from app.utils.auth import get_current_user
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)


def validate_priority(priority: Optional[str]):
    if priority and priority not in PRIORITIES:
        raise HTTPException(status_code=400, detail=f"Priority must be one of: {', '.join(PRIORITIES)}")


def validate_assignee(db: Session, organization_id: int, staff_id: Optional[int]):
    if staff_id is None:
        return
    staff = db.query(OrganizationStaff).filter(OrganizationStaff.id == staff_id).first()
    if not staff or staff.organization_id != organization_id:
        raise HTTPException(status_code=400, detail="Assignee is not a member of this organization")


def validate_project(db: Session, organization_id: int, project_id):
    if project_id is None:
        return
    if not isinstance(project_id, int):
        raise HTTPException(status_code=400, detail="Invalid project ID")
    project = db.query(Project).filter(Project.id == project_id).first()
    # personal projects and other organizations' projects are not linkable
    if not project or project.organization_id != organization_id:
        raise HTTPException(status_code=400, detail="Project not found in this organization")


def _get_goal_or_404(db: Session, goal_id: int) -> OrganizationGoal:
    goal = db.query(OrganizationGoal).filter(OrganizationGoal.id == goal_id).first()
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("/", response_model=List[GoalOut])
def get_goals(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Goals of one organization, soonest target date first"""
    if not organization_id:
        raise HTTPException(status_code=400, detail="Organization ID is required")
    require_member(db, organization_id, current_user)

    return db.query(OrganizationGoal).filter(
        OrganizationGoal.organization_id == organization_id
    ).order_by(
        OrganizationGoal.target_date.is_(None),
        OrganizationGoal.target_date.asc(),
        OrganizationGoal.id
    ).all()


@router.post("/", response_model=GoalOut)
def create_goal(
    goal_data: GoalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a goal - owner or staff with access level 4+"""
    if not goal_data.title or not goal_data.organization_id:
        raise HTTPException(status_code=400, detail="Title and organization ID are required")

    access = require_manager(db, goal_data.organization_id, current_user)
    validate_priority(goal_data.priority)
    validate_project(db, goal_data.organization_id, goal_data.project_id)
    validate_assignee(db, goal_data.organization_id, goal_data.assigned_to)

    db_goal = OrganizationGoal(
        title=goal_data.title,
        description=goal_data.description,
        target_date=goal_data.target_date,
        priority=goal_data.priority or "medium",
        category=goal_data.category or "strategic",
        project_id=goal_data.project_id,
        organization_id=goal_data.organization_id,
        assigned_to=goal_data.assigned_to,
        assigned_by=access.staff.id if access.staff else None,
        status="active",
    )
    db.add(db_goal)
    commit_or_500(db, "Failed to create goal")
    db.refresh(db_goal)

    logger.info("Goal %s created in organization %s by %s", db_goal.id, db_goal.organization_id, current_user.id)
    return db_goal


@router.put("/{goal_id}", response_model=GoalOut)
def update_goal(
    goal_id: int,
    goal_update: GoalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_goal = _get_goal_or_404(db, goal_id)
    require_manager(db, db_goal.organization_id, current_user)

    update_data = goal_update.model_dump(exclude_unset=True)
    if update_data.get("status") and update_data["status"] not in GOAL_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(GOAL_STATUSES)}")
    validate_priority(update_data.get("priority"))
    if "project_id" in update_data:
        validate_project(db, db_goal.organization_id, update_data["project_id"])
    if "assigned_to" in update_data:
        validate_assignee(db, db_goal.organization_id, update_data["assigned_to"])

    for field, value in update_data.items():
        if value is None and field in ("title", "priority", "category", "status"):
            continue
        setattr(db_goal, field, value)

    commit_or_500(db, "Failed to update goal")
    db.refresh(db_goal)
    return db_goal


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_goal = _get_goal_or_404(db, goal_id)
    require_manager(db, db_goal.organization_id, current_user)

    db.delete(db_goal)
    commit_or_500(db, "Failed to delete goal")

    logger.info("Goal %s deleted by %s", goal_id, current_user.id)
    return {"message": "Goal deleted successfully"}
