from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from .user import UserSummary

class StaffCreate(BaseModel):
    organization_id: Optional[int] = None
    user_id: Optional[int] = None
    position: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    access_level: Optional[int] = None
    status: Optional[str] = None
    hire_date: Optional[date] = None
    salary_range: Optional[str] = None
    reports_to: Optional[int] = None

class StaffUpdate(BaseModel):
    position: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    access_level: Optional[int] = None
    status: Optional[str] = None
    hire_date: Optional[date] = None
    salary_range: Optional[str] = None
    reports_to: Optional[int] = None

class ManagerUpdate(BaseModel):
    reports_to: Optional[int] = None

class StaffManager(BaseModel):
    id: int
    name: str
    email: str
    avatar_url: Optional[str] = None

class StaffOut(BaseModel):
    id: int
    organization_id: int
    user_id: int
    position: Optional[str] = None
    department: Optional[str] = None
    role: str
    access_level: int
    status: str
    hire_date: Optional[date] = None
    salary_range: Optional[str] = None
    reports_to: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    manager: Optional[StaffManager] = None

    model_config = {
        "from_attributes": True
    }
