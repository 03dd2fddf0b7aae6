from pydantic import BaseModel, field_validator
from typing import Optional, Union
from datetime import date, datetime

def _normalize_project_id(value):
    # the frontend selector sends "no-project" for "not linked to a project"
    if value in ("no-project", ""):
        return None
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value

class GoalCreate(BaseModel):
    title: Optional[str] = None
    organization_id: Optional[int] = None
    description: Optional[str] = None
    target_date: Optional[date] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    project_id: Optional[Union[int, str]] = None
    assigned_to: Optional[int] = None

    _project = field_validator("project_id", mode="before")(_normalize_project_id)

class GoalUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[date] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    project_id: Optional[Union[int, str]] = None
    assigned_to: Optional[int] = None

    _project = field_validator("project_id", mode="before")(_normalize_project_id)

class ProjectSummary(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = {
        "from_attributes": True
    }

class GoalOut(BaseModel):
    id: int
    organization_id: int
    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    target_date: Optional[date] = None
    priority: str
    category: str
    status: str
    assigned_to: Optional[int] = None
    assigned_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project: Optional[ProjectSummary] = None

    model_config = {
        "from_attributes": True
    }

class SubtaskCreate(BaseModel):
    goal_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None

class SubtaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None

class AssignedUser(BaseModel):
    name: str
    email: str

class SubtaskOut(BaseModel):
    id: int
    goal_id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assigned_user: Optional[AssignedUser] = None
