from pydantic import BaseModel, field_validator
from typing import List, Optional, Union
from datetime import date, datetime
from .goal import GoalOut, ProjectSummary, _normalize_project_id

class CorporateTaskCreate(BaseModel):
    title: Optional[str] = None
    organization_id: Optional[int] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    project_id: Optional[Union[int, str]] = None

    _project = field_validator("project_id", mode="before")(_normalize_project_id)

class CorporateTaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    project_id: Optional[Union[int, str]] = None

    _project = field_validator("project_id", mode="before")(_normalize_project_id)

class CorporateTaskOut(BaseModel):
    id: int
    organization_id: int
    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    priority: str
    category: str
    status: str
    assigned_to: Optional[int] = None
    assigned_by: Optional[int] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project: Optional[ProjectSummary] = None

    model_config = {
        "from_attributes": True
    }

class MyAssignments(BaseModel):
    tasks: List[CorporateTaskOut]
    goals: List[GoalOut]
