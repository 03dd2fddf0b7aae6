# app/models/organization.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    subscription_plan = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="owned_organizations")
    staff = relationship("OrganizationStaff", back_populates="organization", cascade="all, delete-orphan")
    goals = relationship("OrganizationGoal", back_populates="organization", cascade="all, delete-orphan")
    corporate_tasks = relationship("CorporateTask", back_populates="organization", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="organization")


class OrganizationStaff(Base):
    __tablename__ = "organization_staff"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_staff_member"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    position = Column(String, nullable=True)
    department = Column(String, nullable=True)
    role = Column(String, nullable=False, default="Member")  # Owner, Admin, Manager, Member, Viewer
    access_level = Column(Integer, nullable=False, default=2)  # 1 (viewer) .. 5 (full admin)
    status = Column(String, nullable=False, default="Active")
    hire_date = Column(Date, nullable=True)
    salary_range = Column(String, nullable=True)
    reports_to = Column(Integer, ForeignKey("organization_staff.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organization = relationship("Organization", back_populates="staff")
    user = relationship("User", back_populates="memberships")
    manager = relationship("OrganizationStaff", remote_side=[id], foreign_keys=[reports_to])
