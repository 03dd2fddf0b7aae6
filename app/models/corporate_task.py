# app/models/corporate_task.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

TASK_STATUSES = ["pending", "in_progress", "completed", "overdue", "cancelled"]
OPEN_TASK_STATUSES = ["pending", "in_progress"]

class CorporateTask(Base):
    __tablename__ = "corporate_tasks"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    priority = Column(String, nullable=False, default="medium")
    category = Column(String, nullable=False, default="other")
    status = Column(String, nullable=False, default="pending")
    assigned_to = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_by = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    organization = relationship("Organization", back_populates="corporate_tasks")
    project = relationship("Project")
    assignee = relationship("OrganizationStaff", foreign_keys=[assigned_to])
    assigner = relationship("OrganizationStaff", foreign_keys=[assigned_by])
