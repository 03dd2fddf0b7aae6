from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class EntityLinkCreate(BaseModel):
    source_entity_type: Optional[str] = None
    source_entity_id: Optional[int] = None
    target_entity_type: Optional[str] = None
    target_entity_id: Optional[int] = None
    link_type: Optional[str] = "association"
    project_id: Optional[int] = None
    organization_id: Optional[int] = None

class EntityLinkDelete(BaseModel):
    source_entity_type: Optional[str] = None
    source_entity_id: Optional[int] = None
    target_entity_type: Optional[str] = None
    target_entity_id: Optional[int] = None

class EntityLinkOut(BaseModel):
    id: int
    source_entity_type: str
    source_entity_id: int
    target_entity_type: str
    target_entity_id: int
    link_type: str
    project_id: Optional[int] = None
    organization_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class LinkedEntity(BaseModel):
    id: int
    title: str
    type: str
    description: Optional[str] = None
    status: Optional[str] = None
    project_id: Optional[int] = None
