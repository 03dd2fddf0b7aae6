# app/routers/corporate_tasks.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.corporate_task import CorporateTask, TASK_STATUSES
from app.models.goal import OrganizationGoal
from app.models.user import User
from app.routers.organization_goals import validate_assignee, validate_priority, validate_project
from app.schemas.corporate_task import CorporateTaskCreate, CorporateTaskUpdate, CorporateTaskOut, MyAssignments
from app.utils.access import get_staff_record, require_member, require_manager
from app.utils.auth import get_current_user
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_task_or_404(db: Session, task_id: int) -> CorporateTask:
    task = db.query(CorporateTask).filter(CorporateTask.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/corporate-tasks/", response_model=List[CorporateTaskOut])
def get_corporate_tasks(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Tasks of one organization, newest first"""
    if not organization_id:
        raise HTTPException(status_code=400, detail="Organization ID is required")
    require_member(db, organization_id, current_user)

    return db.query(CorporateTask).filter(
        CorporateTask.organization_id == organization_id
    ).order_by(CorporateTask.created_at.desc(), CorporateTask.id.desc()).all()


@router.post("/corporate-tasks/", response_model=CorporateTaskOut)
def create_corporate_task(
    task_data: CorporateTaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a task - owner or staff with access level 4+; the caller is recorded as assigner"""
    if not task_data.title or not task_data.organization_id:
        raise HTTPException(status_code=400, detail="Title and organization ID are required")

    access = require_manager(db, task_data.organization_id, current_user)
    if access.staff is None:
        raise HTTPException(status_code=400, detail="User not found in organization staff")

    validate_priority(task_data.priority)
    validate_project(db, task_data.organization_id, task_data.project_id)
    validate_assignee(db, task_data.organization_id, task_data.assigned_to)

    db_task = CorporateTask(
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority or "medium",
        assigned_to=task_data.assigned_to,
        assigned_by=access.staff.id,
        due_date=task_data.due_date,
        category=task_data.category or "other",
        project_id=task_data.project_id,
        organization_id=task_data.organization_id,
        status="pending",
    )
    db.add(db_task)
    commit_or_500(db, "Failed to create task")
    db.refresh(db_task)

    logger.info("Corporate task %s created in organization %s", db_task.id, db_task.organization_id)
    return db_task


@router.put("/corporate-tasks/{task_id}", response_model=CorporateTaskOut)
def update_corporate_task(
    task_id: int,
    task_update: CorporateTaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_task = _get_task_or_404(db, task_id)
    require_manager(db, db_task.organization_id, current_user)

    update_data = task_update.model_dump(exclude_unset=True)
    if update_data.get("status") and update_data["status"] not in TASK_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(TASK_STATUSES)}")
    validate_priority(update_data.get("priority"))
    if "project_id" in update_data:
        validate_project(db, db_task.organization_id, update_data["project_id"])
    if "assigned_to" in update_data:
        validate_assignee(db, db_task.organization_id, update_data["assigned_to"])

    for field, value in update_data.items():
        if value is None and field in ("title", "priority", "category", "status"):
            continue
        setattr(db_task, field, value)

    commit_or_500(db, "Failed to update task")
    db.refresh(db_task)
    return db_task


@router.delete("/corporate-tasks/{task_id}")
def delete_corporate_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    db_task = _get_task_or_404(db, task_id)
    require_manager(db, db_task.organization_id, current_user)

    db.delete(db_task)
    commit_or_500(db, "Failed to delete task")
    return {"message": "Task deleted successfully"}


@router.get("/my-assignments", response_model=MyAssignments)
def get_my_assignments(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Tasks and goals assigned to the caller's staff record"""
    if not organization_id:
        raise HTTPException(status_code=400, detail="Organization ID is required")

    staff = get_staff_record(db, organization_id, current_user.id)
    if not staff:
        raise HTTPException(status_code=404, detail="User not found in organization")

    tasks = db.query(CorporateTask).filter(
        CorporateTask.organization_id == organization_id,
        CorporateTask.assigned_to == staff.id
    ).order_by(CorporateTask.due_date.is_(None), CorporateTask.due_date.asc()).all()

    goals = db.query(OrganizationGoal).filter(
        OrganizationGoal.organization_id == organization_id,
        OrganizationGoal.assigned_to == staff.id
    ).order_by(OrganizationGoal.target_date.is_(None), OrganizationGoal.target_date.asc()).all()

    return {"tasks": tasks, "goals": goals}
