# app/routers/goal_subtasks.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.goal import GoalSubtask, OrganizationGoal, SUBTASK_STATUSES
from app.models.user import User
from app.routers.organization_goals import validate_assignee, validate_priority
from app.schemas.goal import SubtaskCreate, SubtaskUpdate, SubtaskOut
from app.utils.access import require_member
from app.utils.auth import get_current_user
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)


def serialize_subtask(subtask: GoalSubtask) -> dict:
    assigned_user = None
    if subtask.assigned_to is not None:
        if subtask.assignee is not None and subtask.assignee.user is not None:
            assigned_user = {"name": subtask.assignee.user.name, "email": subtask.assignee.user.email}
        else:
            assigned_user = {"name": "Unknown", "email": "Unknown"}

    return {
        "id": subtask.id,
        "goal_id": subtask.goal_id,
        "title": subtask.title,
        "description": subtask.description,
        "status": subtask.status,
        "priority": subtask.priority,
        "assigned_to": subtask.assigned_to,
        "due_date": subtask.due_date,
        "created_by": subtask.created_by,
        "created_at": subtask.created_at,
        "updated_at": subtask.updated_at,
        "assigned_user": assigned_user,
    }


def _get_accessible_goal(db: Session, goal_id: int, user: User) -> OrganizationGoal:
    goal = db.query(OrganizationGoal).filter(OrganizationGoal.id == goal_id).first()
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    require_member(db, goal.organization_id, user)
    return goal


def _get_subtask_or_404(db: Session, subtask_id: int) -> GoalSubtask:
    subtask = db.query(GoalSubtask).filter(GoalSubtask.id == subtask_id).first()
    if not subtask:
        raise HTTPException(status_code=404, detail="Subtask not found")
    return subtask


@router.get("/", response_model=List[SubtaskOut])
def get_subtasks(
    goal_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not goal_id:
        raise HTTPException(status_code=400, detail="Goal ID is required")
    _get_accessible_goal(db, goal_id, current_user)

    subtasks = db.query(GoalSubtask).filter(
        GoalSubtask.goal_id == goal_id
    ).order_by(GoalSubtask.created_at.asc(), GoalSubtask.id.asc()).all()
    return [serialize_subtask(s) for s in subtasks]


@router.post("/", response_model=SubtaskOut, status_code=status.HTTP_201_CREATED)
def create_subtask(
    subtask_data: SubtaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not subtask_data.goal_id or not subtask_data.title:
        raise HTTPException(status_code=400, detail="Goal ID and title are required")

    goal = _get_accessible_goal(db, subtask_data.goal_id, current_user)
    validate_priority(subtask_data.priority)
    validate_assignee(db, goal.organization_id, subtask_data.assigned_to)

    subtask = GoalSubtask(
        goal_id=goal.id,
        title=subtask_data.title,
        description=subtask_data.description,
        priority=subtask_data.priority or "medium",
        assigned_to=subtask_data.assigned_to,
        due_date=subtask_data.due_date,
        status="pending",
        created_by=current_user.id,
    )
    db.add(subtask)
    commit_or_500(db, "Failed to create subtask")
    db.refresh(subtask)
    return serialize_subtask(subtask)


@router.put("/{subtask_id}", response_model=SubtaskOut)
def update_subtask(
    subtask_id: int,
    subtask_update: SubtaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    subtask = _get_subtask_or_404(db, subtask_id)
    goal = _get_accessible_goal(db, subtask.goal_id, current_user)

    update_data = subtask_update.model_dump(exclude_unset=True)
    if update_data.get("status") and update_data["status"] not in SUBTASK_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(SUBTASK_STATUSES)}")
    validate_priority(update_data.get("priority"))
    if "assigned_to" in update_data:
        validate_assignee(db, goal.organization_id, update_data["assigned_to"])

    for field, value in update_data.items():
        if value is None and field in ("title", "status", "priority"):
            continue
        setattr(subtask, field, value)

    commit_or_500(db, "Failed to update subtask")
    db.refresh(subtask)
    return serialize_subtask(subtask)


@router.delete("/{subtask_id}")
def delete_subtask(
    subtask_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    subtask = _get_subtask_or_404(db, subtask_id)
    _get_accessible_goal(db, subtask.goal_id, current_user)

    db.delete(subtask)
    commit_or_500(db, "Failed to delete subtask")
    return {"success": True}
