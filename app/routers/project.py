# app/routers/project.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List
from app.database import get_db
from app.models.organization import Organization, OrganizationStaff
from app.models.project import Project, TimelineItem
from app.models.user import User
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectOut, TimelineItemCreate, TimelineItemOut
from app.utils.access import get_organization_access, require_manager
from app.utils.auth import get_current_user
from app.utils.persistence import commit_or_500

router = APIRouter()
logger = logging.getLogger(__name__)

VALID_STATUSES = ['active', 'on_hold', 'completed', 'cancelled']


def _can_view(db: Session, project: Project, user: User) -> bool:
    if project.owner_id == user.id:
        return True
    if project.organization_id is None:
        return False
    return get_organization_access(db, project.organization_id, user).is_member


def _can_edit(db: Session, project: Project, user: User) -> bool:
    if project.owner_id == user.id:
        return True
    if project.organization_id is None:
        return False
    return get_organization_access(db, project.organization_id, user).can_manage()


def _get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _get_visible_project(db: Session, project_id: int, user: User) -> Project:
    project = _get_project_or_404(db, project_id)
    if not _can_view(db, project, user):
        raise HTTPException(status_code=403, detail="You don't have access to this project")
    return project


def _get_editable_project(db: Session, project_id: int, user: User) -> Project:
    project = _get_project_or_404(db, project_id)
    if not _can_edit(db, project, user):
        raise HTTPException(status_code=403, detail="Only the project owner or organization managers can edit this project")
    return project


@router.get("/", response_model=List[ProjectOut])
def get_all_projects(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Projects the caller owns plus those of organizations they belong to"""
    member_of = db.query(OrganizationStaff.organization_id).filter(OrganizationStaff.user_id == current_user.id)
    owned_orgs = db.query(Organization.id).filter(Organization.owner_id == current_user.id)
    return db.query(Project).filter(
        or_(
            Project.owner_id == current_user.id,
            Project.organization_id.in_(member_of),
            Project.organization_id.in_(owned_orgs),
        )
    ).order_by(Project.created_at.desc(), Project.id.desc()).all()


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_visible_project(db, project_id, current_user)


@router.post("/", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(project_data: ProjectCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Create a personal project, or an organization project (managers only)"""
    if project_data.organization_id is not None:
        require_manager(db, project_data.organization_id, current_user)

    if project_data.status and project_data.status not in VALID_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(VALID_STATUSES)}")

    db_project = Project(
        name=project_data.name,
        description=project_data.description,
        organization_id=project_data.organization_id,
        owner_id=current_user.id,
        status=project_data.status or "active",
        deadline=project_data.deadline,
    )
    db.add(db_project)
    commit_or_500(db, "Failed to create project")
    db.refresh(db_project)

    logger.info("Project %s created by %s", db_project.id, current_user.id)
    return db_project


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(project_id: int, project_update: ProjectUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    db_project = _get_editable_project(db, project_id, current_user)

    if project_update.status and project_update.status not in VALID_STATUSES:
        raise HTTPException(status_code=400, detail=f"Status must be one of: {', '.join(VALID_STATUSES)}")

    update_data = project_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in ("name", "status"):
            continue
        setattr(db_project, field, value)

    commit_or_500(db, "Failed to update project")
    db.refresh(db_project)
    return db_project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    db_project = _get_editable_project(db, project_id, current_user)

    db.delete(db_project)
    commit_or_500(db, "Failed to delete project")
    logger.info("Project %s deleted by %s", project_id, current_user.id)
    return None


@router.get("/{project_id}/timeline", response_model=List[TimelineItemOut])
def get_project_timeline(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    _get_visible_project(db, project_id, current_user)
    return db.query(TimelineItem).filter(
        TimelineItem.project_id == project_id
    ).order_by(TimelineItem.date.is_(None), TimelineItem.date.asc(), TimelineItem.id).all()


@router.post("/{project_id}/timeline", response_model=TimelineItemOut, status_code=status.HTTP_201_CREATED)
def add_timeline_item(project_id: int, item_data: TimelineItemCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    _get_editable_project(db, project_id, current_user)

    item = TimelineItem(
        project_id=project_id,
        title=item_data.title,
        type=item_data.type or "update",
        description=item_data.description,
        status=item_data.status or "pending",
        date=item_data.date,
        created_by=current_user.id,
    )
    db.add(item)
    commit_or_500(db, "Failed to add timeline item")
    db.refresh(item)
    return item
