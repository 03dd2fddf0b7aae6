from datetime import date

import pytest

from app.models.corporate_task import CorporateTask
from app.models.goal import OrganizationGoal
from app.models.project import Project


@pytest.fixture
def lead(organization, make_user, make_staff, owner_staff):
    return make_staff(organization, make_user("Lena Lead"), role="Manager", access_level=4, reports_to=owner_staff)


@pytest.fixture
def member(organization, make_user, make_staff, lead):
    return make_staff(organization, make_user("Sam Member"), reports_to=lead)


def test_create_task_records_assigner(client, organization, lead, member, auth):
    response = client.post("/corporate-tasks/", headers=auth(lead.user), json={
        "title": "Prepare budget",
        "organization_id": organization.id,
        "assigned_to": member.id,
        "due_date": "2030-03-01",
        "project_id": "no-project",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["assigned_by"] == lead.id
    assert body["assigned_to"] == member.id
    assert body["status"] == "pending"
    assert body["category"] == "other"
    assert body["project_id"] is None


def test_create_task_needs_staff_record(client, db, organization, owner, owner_staff, auth):
    # an owner whose staff row was removed still manages, but cannot be the assigner
    db.delete(owner_staff)
    db.commit()

    response = client.post("/corporate-tasks/", headers=auth(owner), json={
        "title": "Orphan",
        "organization_id": organization.id,
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "User not found in organization staff"


def test_create_task_forbidden_for_members(client, organization, member, auth):
    response = client.post("/corporate-tasks/", headers=auth(member.user), json={
        "title": "Nope",
        "organization_id": organization.id,
    })

    assert response.status_code == 403


def test_list_update_delete(client, db, organization, lead, member, auth):
    headers = auth(lead.user)
    created = client.post("/corporate-tasks/", headers=headers, json={
        "title": "Audit",
        "organization_id": organization.id,
    }).json()

    listed = client.get(f"/corporate-tasks/?organization_id={organization.id}", headers=auth(member.user))
    assert [t["id"] for t in listed.json()] == [created["id"]]

    updated = client.put(f"/corporate-tasks/{created['id']}", headers=headers, json={"status": "in_progress"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "in_progress"

    assert client.put(f"/corporate-tasks/{created['id']}", headers=headers, json={"status": "later"}).status_code == 400

    deleted = client.delete(f"/corporate-tasks/{created['id']}", headers=headers)
    assert deleted.json() == {"message": "Task deleted successfully"}
    assert client.delete(f"/corporate-tasks/{created['id']}", headers=headers).status_code == 404


def test_my_assignments(client, db, organization, lead, member, auth):
    db.add_all([
        CorporateTask(organization_id=organization.id, title="Later", assigned_to=member.id, due_date=date(2031, 1, 1)),
        CorporateTask(organization_id=organization.id, title="Sooner", assigned_to=member.id, due_date=date(2030, 1, 1)),
        CorporateTask(organization_id=organization.id, title="Not mine", assigned_to=lead.id),
        OrganizationGoal(organization_id=organization.id, title="My goal", assigned_to=member.id),
    ])
    db.commit()

    response = client.get(f"/my-assignments?organization_id={organization.id}", headers=auth(member.user))

    assert response.status_code == 200
    body = response.json()
    assert [t["title"] for t in body["tasks"]] == ["Sooner", "Later"]
    assert [g["title"] for g in body["goals"]] == ["My goal"]


def test_my_assignments_not_a_member(client, organization, make_user, auth):
    response = client.get(f"/my-assignments?organization_id={organization.id}", headers=auth(make_user("Otto Outsider")))

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found in organization"


def test_task_rejects_projects_outside_the_organization(client, db, organization, lead, make_user, auth):
    stranger = make_user("Stan Stranger")
    personal = Project(name="Private", owner_id=stranger.id)
    own = Project(name="Internal", organization_id=organization.id, owner_id=stranger.id)
    db.add_all([personal, own])
    db.commit()
    headers = auth(lead.user)

    response = client.post("/corporate-tasks/", headers=headers, json={
        "title": "Peek",
        "organization_id": organization.id,
        "project_id": personal.id,
    })
    assert response.status_code == 400

    created = client.post("/corporate-tasks/", headers=headers, json={
        "title": "Plan",
        "organization_id": organization.id,
        "project_id": own.id,
    })
    assert created.status_code == 200
    assert created.json()["project"]["name"] == "Internal"

    moved = client.put(f"/corporate-tasks/{created.json()['id']}", headers=headers, json={"project_id": personal.id})
    assert moved.status_code == 400
