# app/models/goal.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

GOAL_STATUSES = ["active", "in_progress", "completed", "overdue", "cancelled"]
SUBTASK_STATUSES = ["pending", "in_progress", "completed", "cancelled"]
PRIORITIES = ["low", "medium", "high", "critical"]

class OrganizationGoal(Base):
    __tablename__ = "organization_goals"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_date = Column(Date, nullable=True)
    priority = Column(String, nullable=False, default="medium")
    category = Column(String, nullable=False, default="strategic")
    status = Column(String, nullable=False, default="active")
    assigned_to = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_by = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="goals")
    project = relationship("Project")
    assignee = relationship("OrganizationStaff", foreign_keys=[assigned_to])
    assigner = relationship("OrganizationStaff", foreign_keys=[assigned_by])
    subtasks = relationship("GoalSubtask", back_populates="goal", cascade="all, delete-orphan")


class GoalSubtask(Base):
    __tablename__ = "organization_goal_subtasks"

    id = Column(Integer, primary_key=True, index=True)
    goal_id = Column(Integer, ForeignKey("organization_goals.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="pending")
    priority = Column(String, nullable=False, default="medium")
    assigned_to = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True)
    due_date = Column(Date, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    goal = relationship("OrganizationGoal", back_populates="subtasks")
    assignee = relationship("OrganizationStaff", foreign_keys=[assigned_to])
