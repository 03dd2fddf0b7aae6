# app/routers/deadlines.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.corporate_task import CorporateTask
from app.models.goal import OrganizationGoal
from app.models.project import Project
from app.models.user import User
from app.schemas.deadline import DeadlineItem
from app.utils.access import require_member
from app.utils.auth import get_current_user

router = APIRouter()


def collect_deadlines(db: Session, organization_id: int, today: Optional[date] = None) -> List[dict]:
    """Goal target dates, task due dates and project deadlines, oldest first"""
    today = today or date.today()
    deadlines = []

    def add(entity_id, title, entity_type, when, item_status, project_id=None):
        deadlines.append({
            "id": entity_id,
            "title": title,
            "type": entity_type,
            "date": when,
            "status": "past" if when < today else "upcoming",
            "item_status": item_status,
            "project_id": project_id,
        })

    goals = db.query(OrganizationGoal).filter(
        OrganizationGoal.organization_id == organization_id,
        OrganizationGoal.target_date.isnot(None)
    ).all()
    for goal in goals:
        add(goal.id, goal.title, "goal", goal.target_date, goal.status, goal.project_id)

    tasks = db.query(CorporateTask).filter(
        CorporateTask.organization_id == organization_id,
        CorporateTask.due_date.isnot(None)
    ).all()
    for task in tasks:
        add(task.id, task.title, "task", task.due_date, task.status, task.project_id)

    projects = db.query(Project).filter(
        Project.organization_id == organization_id,
        Project.deadline.isnot(None)
    ).all()
    for project in projects:
        add(project.id, project.name, "project", project.deadline, project.status, project.id)

    deadlines.sort(key=lambda item: (item["date"], item["type"], item["id"]))
    return deadlines


@router.get("/deadlines", response_model=List[DeadlineItem])
def get_deadlines(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not organization_id:
        raise HTTPException(status_code=400, detail="Organization ID is required")
    require_member(db, organization_id, current_user)
    return collect_deadlines(db, organization_id)
