from pydantic import BaseModel
from typing import List, Optional
from .user import UserSummary

class HierarchyNodeOut(BaseModel):
    id: int
    user_id: int
    position: Optional[str] = None
    department: Optional[str] = None
    role: str
    access_level: int
    status: str
    reports_to: Optional[int] = None
    level: int
    user: Optional[UserSummary] = None
    children: List["HierarchyNodeOut"] = []

class OrgChart(BaseModel):
    organization_id: int
    total: int
    roots: List[HierarchyNodeOut]
    unreachable: List[int]
