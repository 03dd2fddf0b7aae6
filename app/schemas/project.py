from pydantic import BaseModel
from typing import Optional
import datetime as dt

class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    organization_id: Optional[int] = None
    status: Optional[str] = "active"
    deadline: Optional[dt.date] = None

class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[dt.date] = None

class ProjectOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    organization_id: Optional[int] = None
    owner_id: int
    status: str
    deadline: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {
        "from_attributes": True
    }

class TimelineItemCreate(BaseModel):
    title: str
    type: Optional[str] = "update"
    description: Optional[str] = None
    status: Optional[str] = "pending"
    date: Optional[dt.date] = None

class TimelineItemOut(BaseModel):
    id: int
    project_id: int
    title: str
    type: str
    description: Optional[str] = None
    status: str
    date: Optional[dt.date] = None
    created_by: Optional[int] = None
    created_at: Optional[dt.datetime] = None

    model_config = {
        "from_attributes": True
    }
