# app/models/entity_link.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base

ENTITY_TYPES = ["task", "timeline", "project", "organization", "note", "file"]

class EntityLink(Base):
    """Polymorphic association between two entities (e.g. a timeline item and a task)"""
    __tablename__ = "entity_links"
    __table_args__ = (
        UniqueConstraint(
            "source_entity_type", "source_entity_id", "target_entity_type", "target_entity_id",
            name="uq_entity_link_pair",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    source_entity_type = Column(String, nullable=False, index=True)
    source_entity_id = Column(Integer, nullable=False, index=True)
    target_entity_type = Column(String, nullable=False, index=True)
    target_entity_id = Column(Integer, nullable=False, index=True)
    link_type = Column(String, nullable=False, default="association")
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
