# app/services/entity_links.py
"""
Generic links between timeline items, tasks, projects, notes and files.

A link is directional (source -> target) but can be looked up from either
end. Only timeline items, tasks and projects are resolved to display records;
links to other entity types are stored but not expanded.
"""

import logging
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.corporate_task import CorporateTask
from app.models.entity_link import EntityLink, ENTITY_TYPES
from app.models.project import Project, TimelineItem
from app.utils.persistence import commit_or_500

logger = logging.getLogger(__name__)


class DuplicateLinkError(Exception):
    """Raised when the same source/target pair is linked twice"""


def is_valid_entity_type(entity_type: Optional[str]) -> bool:
    return entity_type in ENTITY_TYPES


def _pair_filter(query, source_type, source_id, target_type, target_id):
    return query.filter(
        EntityLink.source_entity_type == source_type,
        EntityLink.source_entity_id == source_id,
        EntityLink.target_entity_type == target_type,
        EntityLink.target_entity_id == target_id,
    )


def create_entity_link(
    db: Session,
    source_type: str,
    source_id: int,
    target_type: str,
    target_id: int,
    link_type: str = "association",
    project_id: Optional[int] = None,
    organization_id: Optional[int] = None,
    created_by: Optional[int] = None,
) -> EntityLink:
    if are_entities_linked(db, source_type, source_id, target_type, target_id):
        raise DuplicateLinkError(f"{source_type}:{source_id} is already linked to {target_type}:{target_id}")

    link = EntityLink(
        source_entity_type=source_type,
        source_entity_id=source_id,
        target_entity_type=target_type,
        target_entity_id=target_id,
        link_type=link_type or "association",
        project_id=project_id,
        organization_id=organization_id,
        created_by=created_by,
    )
    db.add(link)
    try:
        db.flush()
    except IntegrityError:
        # lost a race against a concurrent insert of the same pair
        db.rollback()
        raise DuplicateLinkError(f"{source_type}:{source_id} is already linked to {target_type}:{target_id}")
    commit_or_500(db, "Failed to create entity link")
    db.refresh(link)
    logger.info("Linked %s:%s -> %s:%s", source_type, source_id, target_type, target_id)
    return link


def delete_entity_link(db: Session, source_type: str, source_id: int, target_type: str, target_id: int) -> int:
    """Delete the link between two entities, returning the number of rows removed"""
    deleted = _pair_filter(db.query(EntityLink), source_type, source_id, target_type, target_id).delete(
        synchronize_session=False
    )
    commit_or_500(db, "Failed to delete entity link")
    return deleted


def are_entities_linked(db: Session, source_type: str, source_id: int, target_type: str, target_id: int) -> bool:
    return _pair_filter(db.query(EntityLink.id), source_type, source_id, target_type, target_id).first() is not None


def _resolve(db: Session, refs: List[tuple]) -> List[Dict]:
    """Expand (entity_type, entity_id) pairs into display records, keeping the order of refs"""
    ids_by_type: Dict[str, List[int]] = {}
    for entity_type, entity_id in refs:
        ids_by_type.setdefault(entity_type, []).append(entity_id)

    records: Dict[tuple, Dict] = {}

    if ids_by_type.get("timeline"):
        items = db.query(TimelineItem).filter(TimelineItem.id.in_(ids_by_type["timeline"])).all()
        for item in items:
            records[("timeline", item.id)] = {
                "id": item.id,
                "title": item.title,
                "type": item.type,
                "description": item.description,
                "status": item.status,
                "project_id": item.project_id,
            }

    if ids_by_type.get("task"):
        tasks = db.query(CorporateTask).filter(CorporateTask.id.in_(ids_by_type["task"])).all()
        for task in tasks:
            records[("task", task.id)] = {
                "id": task.id,
                "title": task.title,
                "type": "task",
                "description": task.description,
                "status": task.status,
                "project_id": task.project_id,
            }

    if ids_by_type.get("project"):
        projects = db.query(Project).filter(Project.id.in_(ids_by_type["project"])).all()
        for project in projects:
            records[("project", project.id)] = {
                "id": project.id,
                "title": project.name,
                "type": "project",
                "description": project.description,
                "status": project.status,
            }

    # refs to other entity types, or to deleted rows, have no record
    return [records[ref] for ref in refs if ref in records]


def get_linked_entities(db: Session, entity_type: str, entity_id: int) -> List[Dict]:
    """Entities the given entity links to"""
    links = db.query(EntityLink).filter(
        EntityLink.source_entity_type == entity_type,
        EntityLink.source_entity_id == entity_id,
    ).order_by(EntityLink.id).all()
    return _resolve(db, [(link.target_entity_type, link.target_entity_id) for link in links])


def get_entities_linking_to(db: Session, entity_type: str, entity_id: int) -> List[Dict]:
    """Entities that link to the given entity"""
    links = db.query(EntityLink).filter(
        EntityLink.target_entity_type == entity_type,
        EntityLink.target_entity_id == entity_id,
    ).order_by(EntityLink.id).all()
    return _resolve(db, [(link.source_entity_type, link.source_entity_id) for link in links])
