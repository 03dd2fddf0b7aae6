from pydantic import BaseModel
from typing import Optional
import datetime as dt

class DeadlineItem(BaseModel):
    id: int
    title: str
    type: str  # goal, task or project
    date: dt.date
    status: str  # past or upcoming
    item_status: Optional[str] = None
    project_id: Optional[int] = None
