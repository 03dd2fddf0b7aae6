# app/routers/entity_links.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.models.entity_link import ENTITY_TYPES
from app.models.user import User
from app.schemas.entity_link import EntityLinkCreate, EntityLinkDelete, EntityLinkOut, LinkedEntity
from app.services import entity_links
from app.utils.auth import get_current_user

router = APIRouter()


def _check_type(entity_type: Optional[str]):
    if not entity_links.is_valid_entity_type(entity_type):
        raise HTTPException(
            status_code=400,
            detail=f"Entity type must be one of: {', '.join(ENTITY_TYPES)}"
        )


def _check_lookup(entity_type: Optional[str], entity_id: Optional[int]):
    if not entity_type or entity_id is None:
        raise HTTPException(status_code=400, detail="Entity type and ID are required")
    _check_type(entity_type)


@router.post("/", response_model=EntityLinkOut, status_code=status.HTTP_201_CREATED)
def create_link(
    link_data: EntityLinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if (not link_data.source_entity_type or link_data.source_entity_id is None
            or not link_data.target_entity_type or link_data.target_entity_id is None):
        raise HTTPException(status_code=400, detail="Missing required fields")
    _check_type(link_data.source_entity_type)
    _check_type(link_data.target_entity_type)

    try:
        return entity_links.create_entity_link(
            db,
            link_data.source_entity_type,
            link_data.source_entity_id,
            link_data.target_entity_type,
            link_data.target_entity_id,
            link_type=link_data.link_type,
            project_id=link_data.project_id,
            organization_id=link_data.organization_id,
            created_by=current_user.id,
        )
    except entity_links.DuplicateLinkError:
        raise HTTPException(status_code=409, detail="Entities are already linked")


@router.delete("/delete")
def delete_link(
    link_data: EntityLinkDelete,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if (not link_data.source_entity_type or link_data.source_entity_id is None
            or not link_data.target_entity_type or link_data.target_entity_id is None):
        raise HTTPException(status_code=400, detail="Missing required fields")

    deleted = entity_links.delete_entity_link(
        db,
        link_data.source_entity_type,
        link_data.source_entity_id,
        link_data.target_entity_type,
        link_data.target_entity_id,
    )
    if not deleted:
        raise HTTPException(status_code=404, detail="Entity link not found")
    return {"success": True}


@router.get("/", response_model=List[LinkedEntity])
def get_linked(
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Entities linked from the given entity"""
    _check_lookup(entity_type, entity_id)
    return entity_links.get_linked_entities(db, entity_type, entity_id)


@router.get("/reverse", response_model=List[LinkedEntity])
def get_linking_to(
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Entities that link to the given entity"""
    _check_lookup(entity_type, entity_id)
    return entity_links.get_entities_linking_to(db, entity_type, entity_id)


@router.get("/check")
def check_linked(
    source_entity_type: Optional[str] = None,
    source_entity_id: Optional[int] = None,
    target_entity_type: Optional[str] = None,
    target_entity_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _check_lookup(source_entity_type, source_entity_id)
    _check_lookup(target_entity_type, target_entity_id)
    linked = entity_links.are_entities_linked(
        db, source_entity_type, source_entity_id, target_entity_type, target_entity_id
    )
    return {"linked": linked}
