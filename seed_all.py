"""
Database seeding script
Creates tables and a demo organization with a reporting hierarchy, goals and tasks
"""

from datetime import date, timedelta
from create_tables import create_tables, DEFAULT_ADMIN
from app.database import SessionLocal
from app.models import (
    User, Organization, OrganizationStaff, Project, TimelineItem,
    OrganizationGoal, GoalSubtask, CorporateTask, EntityLink,
)
from app.utils.security import get_password_hash

DEMO_PASSWORD = "password123"

# (key, name, email, position, role, access level, manager key)
DEMO_STAFF = [
    ("ceo", "Alex Morgan", "alex@demo.com", "Chief Executive Officer", "Owner", 5, None),
    ("cto", "Priya Shah", "priya@demo.com", "Chief Technology Officer", "Admin", 5, "ceo"),
    ("coo", "Daniel Kim", "daniel@demo.com", "Chief Operating Officer", "Admin", 4, "ceo"),
    ("eng_mgr", "Sara Lopez", "sara@demo.com", "Engineering Manager", "Manager", 4, "cto"),
    ("dev1", "Tom Becker", "tom@demo.com", "Software Engineer", "Member", 2, "eng_mgr"),
    ("dev2", "Mia Chen", "mia@demo.com", "Software Engineer", "Member", 2, "eng_mgr"),
    ("ops1", "Leo Rossi", "leo@demo.com", "Operations Analyst", "Member", 2, "coo"),
    ("advisor", "Nora Patel", "nora@demo.com", "Advisor", "Viewer", 1, None),
]

def seed_demo_data():
    db = SessionLocal()
    try:
        users = {}
        for key, name, email, *_ in DEMO_STAFF:
            user = User(name=name, email=email, hashed_password=get_password_hash(DEMO_PASSWORD), role="user")
            db.add(user)
            users[key] = user
        db.flush()

        organization = Organization(
            name="Demo Holdings",
            description="Sample organization with a full reporting hierarchy",
            owner_id=users["ceo"].id,
            subscription_plan="pro",
        )
        db.add(organization)
        db.flush()

        # Managers are listed before their reports, so one pass resolves reports_to
        staff = {}
        for key, _, _, position, role, level, manager_key in DEMO_STAFF:
            member = OrganizationStaff(
                organization_id=organization.id,
                user_id=users[key].id,
                position=position,
                role=role,
                access_level=level,
                status="Active",
                hire_date=date.today() - timedelta(days=365),
                reports_to=staff[manager_key].id if manager_key else None,
            )
            db.add(member)
            db.flush()
            staff[key] = member
        print(f"✅ Created organization '{organization.name}' with {len(staff)} staff members")

        project = Project(
            name="Platform Relaunch",
            description="Rebuild of the customer platform",
            organization_id=organization.id,
            owner_id=users["cto"].id,
            deadline=date.today() + timedelta(days=90),
        )
        db.add(project)
        db.flush()

        milestone = TimelineItem(project_id=project.id, title="Beta release", type="milestone",
                                 date=date.today() + timedelta(days=45))
        db.add(milestone)

        goal = OrganizationGoal(
            organization_id=organization.id,
            project_id=project.id,
            title="Launch the new platform",
            target_date=date.today() + timedelta(days=90),
            priority="high",
            assigned_to=staff["eng_mgr"].id,
            assigned_by=staff["ceo"].id,
        )
        db.add(goal)
        db.flush()

        db.add(GoalSubtask(goal_id=goal.id, title="Finalize architecture", assigned_to=staff["dev1"].id,
                           created_by=users["eng_mgr"].id, due_date=date.today() + timedelta(days=14)))

        task = CorporateTask(
            organization_id=organization.id,
            project_id=project.id,
            title="Set up CI pipeline",
            assigned_to=staff["dev2"].id,
            assigned_by=staff["eng_mgr"].id,
            due_date=date.today() + timedelta(days=7),
        )
        db.add(task)
        db.flush()

        db.add(EntityLink(source_entity_type="timeline", source_entity_id=milestone.id,
                          target_entity_type="task", target_entity_id=task.id,
                          project_id=project.id, organization_id=organization.id,
                          created_by=users["cto"].id))

        db.commit()
        print("✅ Demo project, goal, subtask, task and entity link created")
        print(f"   Staff login password: {DEMO_PASSWORD}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_tables()
    seed_demo_data()
    print(f"\nDone. Admin login: {DEFAULT_ADMIN['email']} / {DEFAULT_ADMIN['password']}")
