from datetime import date

import pytest

from app.models.goal import GoalSubtask, OrganizationGoal
from app.models.organization import Organization
from app.models.project import Project


@pytest.fixture
def member(organization, make_user, make_staff, owner_staff):
    return make_staff(organization, make_user("Sam Member"), reports_to=owner_staff)


@pytest.fixture
def project(db, organization, owner):
    project = Project(name="Launch", organization_id=organization.id, owner_id=owner.id)
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def goal(db, organization, owner_staff):
    goal = OrganizationGoal(
        organization_id=organization.id,
        title="Ship v2",
        target_date=date(2030, 1, 1),
        assigned_by=owner_staff.id,
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def test_create_goal(client, organization, owner, owner_staff, member, project, auth):
    response = client.post("/organization-goals/", headers=auth(owner), json={
        "title": "Grow revenue",
        "organization_id": organization.id,
        "target_date": "2030-06-30",
        "priority": "high",
        "project_id": str(project.id),
        "assigned_to": member.id,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "active"
    assert body["category"] == "strategic"
    assert body["assigned_by"] == owner_staff.id
    assert body["project_id"] == project.id
    assert body["project"]["name"] == "Launch"


def test_create_goal_without_project(client, organization, owner, auth):
    response = client.post("/organization-goals/", headers=auth(owner), json={
        "title": "Hire",
        "organization_id": organization.id,
        "project_id": "no-project",
    })

    assert response.status_code == 200
    assert response.json()["project_id"] is None


def test_create_goal_missing_title(client, organization, owner, auth):
    response = client.post("/organization-goals/", headers=auth(owner), json={"organization_id": organization.id})

    assert response.status_code == 400


def test_create_goal_needs_manage_rights(client, organization, member, auth):
    response = client.post("/organization-goals/", headers=auth(member.user), json={
        "title": "Sneaky",
        "organization_id": organization.id,
    })

    assert response.status_code == 403


def test_create_goal_rejects_foreign_assignee(client, organization, owner, auth):
    response = client.post("/organization-goals/", headers=auth(owner), json={
        "title": "Grow",
        "organization_id": organization.id,
        "assigned_to": 999,
    })

    assert response.status_code == 400


def test_create_goal_bad_priority(client, organization, owner, auth):
    response = client.post("/organization-goals/", headers=auth(owner), json={
        "title": "Grow",
        "organization_id": organization.id,
        "priority": "urgent!!",
    })

    assert response.status_code == 400


def test_list_goals_soonest_first(client, db, organization, owner, member, goal, auth):
    db.add_all([
        OrganizationGoal(organization_id=organization.id, title="Undated"),
        OrganizationGoal(organization_id=organization.id, title="Soon", target_date=date(2029, 1, 1)),
    ])
    db.commit()

    response = client.get(f"/organization-goals/?organization_id={organization.id}", headers=auth(member.user))

    assert response.status_code == 200
    assert [g["title"] for g in response.json()] == ["Soon", "Ship v2", "Undated"]


def test_list_goals_requires_organization_id(client, owner, auth):
    assert client.get("/organization-goals/", headers=auth(owner)).status_code == 400


def test_update_goal(client, owner, goal, auth):
    response = client.put(f"/organization-goals/{goal.id}", headers=auth(owner), json={
        "status": "completed",
        "title": None,
    })

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["title"] == "Ship v2"

    bad = client.put(f"/organization-goals/{goal.id}", headers=auth(owner), json={"status": "done-ish"})
    assert bad.status_code == 400


def test_delete_goal(client, db, owner, goal, auth):
    response = client.delete(f"/organization-goals/{goal.id}", headers=auth(owner))

    assert response.status_code == 200
    assert response.json() == {"message": "Goal deleted successfully"}
    assert client.delete(f"/organization-goals/{goal.id}", headers=auth(owner)).status_code == 404


def test_subtask_lifecycle(client, db, member, goal, auth):
    headers = auth(member.user)

    created = client.post("/goal-subtasks/", headers=headers, json={
        "goal_id": goal.id,
        "title": "Write tests",
        "assigned_to": member.id,
        "due_date": "2029-12-01",
    })
    assert created.status_code == 201
    subtask = created.json()
    assert subtask["status"] == "pending"
    assert subtask["priority"] == "medium"
    assert subtask["created_by"] == member.user_id
    assert subtask["assigned_user"] == {"name": "Sam Member", "email": "sam.member@example.com"}

    listed = client.get(f"/goal-subtasks/?goal_id={goal.id}", headers=headers)
    assert [s["id"] for s in listed.json()] == [subtask["id"]]

    updated = client.put(f"/goal-subtasks/{subtask['id']}", headers=headers, json={"status": "completed"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "completed"

    deleted = client.delete(f"/goal-subtasks/{subtask['id']}", headers=headers)
    assert deleted.json() == {"success": True}
    db.expire_all()
    assert db.query(GoalSubtask).count() == 0


def test_subtask_requires_goal_and_title(client, owner, goal, auth):
    assert client.post("/goal-subtasks/", headers=auth(owner), json={"goal_id": goal.id}).status_code == 400
    assert client.get("/goal-subtasks/", headers=auth(owner)).status_code == 400


def test_subtask_outsider_forbidden(client, goal, make_user, auth):
    outsider = make_user("Otto Outsider")

    response = client.get(f"/goal-subtasks/?goal_id={goal.id}", headers=auth(outsider))

    assert response.status_code == 403


def test_deleting_goal_removes_subtasks(client, db, owner, goal, auth):
    db.add(GoalSubtask(goal_id=goal.id, title="Child"))
    db.commit()

    client.delete(f"/organization-goals/{goal.id}", headers=auth(owner))

    db.expire_all()
    assert db.query(GoalSubtask).count() == 0


@pytest.fixture
def foreign_projects(db, make_user):
    stranger = make_user("Stan Stranger")
    other_org = Organization(name="Rival Ltd", owner_id=stranger.id)
    db.add(other_org)
    db.flush()
    rival = Project(name="Secret Merger", description="confidential", organization_id=other_org.id, owner_id=stranger.id)
    personal = Project(name="Private", owner_id=stranger.id)
    db.add_all([rival, personal])
    db.commit()
    return {"rival": rival, "personal": personal}


def test_create_goal_rejects_other_organizations_project(client, organization, owner, foreign_projects, auth):
    for project in foreign_projects.values():
        response = client.post("/organization-goals/", headers=auth(owner), json={
            "title": "Borrowed",
            "organization_id": organization.id,
            "project_id": project.id,
        })

        assert response.status_code == 400
        assert "Secret Merger" not in response.text


def test_update_goal_rejects_other_organizations_project(client, owner, goal, foreign_projects, project, auth):
    response = client.put(f"/organization-goals/{goal.id}", headers=auth(owner), json={
        "project_id": foreign_projects["rival"].id,
    })
    assert response.status_code == 400

    response = client.put(f"/organization-goals/{goal.id}", headers=auth(owner), json={"project_id": project.id})
    assert response.status_code == 200
    assert response.json()["project"]["name"] == "Launch"
