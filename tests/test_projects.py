def test_personal_project_lifecycle(client, make_user, auth):
    user = make_user("Pia Planner")
    headers = auth(user)

    created = client.post("/projects/", headers=headers, json={"name": "Garden", "deadline": "2030-04-01"})
    assert created.status_code == 201
    project = created.json()
    assert project["status"] == "active"
    assert project["organization_id"] is None

    assert [p["id"] for p in client.get("/projects/", headers=headers).json()] == [project["id"]]

    updated = client.put(f"/projects/{project['id']}", headers=headers, json={"status": "on_hold"})
    assert updated.json()["status"] == "on_hold"
    assert client.put(f"/projects/{project['id']}", headers=headers, json={"status": "lost"}).status_code == 400

    other = make_user("Oscar Other")
    assert client.get(f"/projects/{project['id']}", headers=auth(other)).status_code == 403

    assert client.delete(f"/projects/{project['id']}", headers=headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=headers).status_code == 404


def test_organization_project_visible_to_members(client, organization, owner, make_user, make_staff, auth):
    member = make_user("Sam Member")
    make_staff(organization, member)

    created = client.post("/projects/", headers=auth(owner), json={"name": "Expansion", "organization_id": organization.id})
    assert created.status_code == 201
    project_id = created.json()["id"]

    assert client.get(f"/projects/{project_id}", headers=auth(member)).status_code == 200
    assert client.put(f"/projects/{project_id}", headers=auth(member), json={"name": "Mine"}).status_code == 403
    assert client.post("/projects/", headers=auth(member), json={
        "name": "Side quest",
        "organization_id": organization.id,
    }).status_code == 403


def test_timeline(client, make_user, auth):
    user = make_user("Pia Planner")
    headers = auth(user)
    project_id = client.post("/projects/", headers=headers, json={"name": "Garden"}).json()["id"]

    client.post(f"/projects/{project_id}/timeline", headers=headers, json={"title": "Harvest", "date": "2030-09-01"})
    created = client.post(f"/projects/{project_id}/timeline", headers=headers, json={
        "title": "Plant",
        "type": "milestone",
        "date": "2030-04-01",
    })
    assert created.status_code == 201
    assert created.json()["created_by"] == user.id

    timeline = client.get(f"/projects/{project_id}/timeline", headers=headers).json()
    assert [(i["title"], i["type"]) for i in timeline] == [("Plant", "milestone"), ("Harvest", "update")]
