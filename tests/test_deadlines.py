import asyncio
from datetime import date

import pytest

from app.models.corporate_task import CorporateTask
from app.models.goal import OrganizationGoal
from app.models.project import Project
from app.routers.deadlines import collect_deadlines
from app.services.scheduler import DeadlineScheduler, mark_overdue

TODAY = date(2030, 6, 15)


@pytest.fixture
def dated_items(db, organization, owner):
    project = Project(name="Rollout", organization_id=organization.id, owner_id=owner.id, deadline=date(2030, 7, 1))
    db.add(project)
    db.flush()
    db.add_all([
        OrganizationGoal(organization_id=organization.id, title="Old goal", target_date=date(2030, 6, 1)),
        OrganizationGoal(organization_id=organization.id, title="Done goal", target_date=date(2030, 5, 1), status="completed"),
        OrganizationGoal(organization_id=organization.id, title="Someday"),
        CorporateTask(organization_id=organization.id, title="Late task", due_date=date(2030, 6, 10), project_id=project.id),
        CorporateTask(organization_id=organization.id, title="Due today", due_date=TODAY, status="in_progress"),
    ])
    db.commit()
    return project


def test_collect_deadlines(db, organization, dated_items):
    deadlines = collect_deadlines(db, organization.id, today=TODAY)

    assert [(d["title"], d["type"], d["status"]) for d in deadlines] == [
        ("Done goal", "goal", "past"),
        ("Old goal", "goal", "past"),
        ("Late task", "task", "past"),
        ("Due today", "task", "upcoming"),
        ("Rollout", "project", "upcoming"),
    ]
    assert deadlines[2]["project_id"] == dated_items.id


def test_deadlines_endpoint(client, organization, owner, dated_items, make_user, auth):
    response = client.get(f"/deadlines?organization_id={organization.id}", headers=auth(owner))

    assert response.status_code == 200
    assert len(response.json()) == 5
    assert client.get("/deadlines", headers=auth(owner)).status_code == 400
    outsider = make_user("Otto Outsider")
    assert client.get(f"/deadlines?organization_id={organization.id}", headers=auth(outsider)).status_code == 403


def test_mark_overdue(db, organization, dated_items):
    result = mark_overdue(db, today=TODAY)

    assert result == {"goals": 1, "tasks": 1}
    statuses = {g.title: g.status for g in db.query(OrganizationGoal).all()}
    statuses.update({t.title: t.status for t in db.query(CorporateTask).all()})
    assert statuses == {
        "Old goal": "overdue",
        "Done goal": "completed",
        "Someday": "active",
        "Late task": "overdue",
        "Due today": "in_progress",
    }

    assert mark_overdue(db, today=TODAY) == {"goals": 0, "tasks": 0}


def test_scheduler_check_uses_its_own_session(db, organization, session_factory):
    db.add(OrganizationGoal(organization_id=organization.id, title="Ancient", target_date=date(2000, 1, 1)))
    db.commit()

    scheduler = DeadlineScheduler(session_factory=session_factory)

    result = asyncio.run(scheduler.check_overdue())

    assert result == {"goals": 1, "tasks": 0}
    assert scheduler.last_result == result
    assert scheduler.get_status() == {"status": "stopped", "jobs": [], "last_result": result}


def test_scheduler_status_endpoint(client, db):
    response = client.get("/scheduler/status")

    assert response.status_code == 200
    assert response.json()["status"] == "stopped"


def test_manual_overdue_trigger_is_admin_only(client, make_user, auth):
    assert client.post("/scheduler/trigger/overdue").status_code == 401
    assert client.post("/scheduler/trigger/overdue", headers=auth(make_user("Uma User"))).status_code == 403
