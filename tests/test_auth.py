from datetime import timedelta

from app.utils.security import create_access_token


def test_signup_and_me(client, db):
    response = client.post("/auth/signup", json={
        "name": "Nora New",
        "email": "nora@example.com",
        "password": "secret123",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "nora@example.com"
    assert body["user"]["role"] == "user"

    me = client.get("/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Nora New"


def test_signup_duplicate_email(client, make_user):
    user = make_user("Dora Dup")

    response = client.post("/auth/signup", json={"name": "Dora", "email": user.email, "password": "x"})

    assert response.status_code == 400


def test_login(client, make_user):
    user = make_user("Liam Login")

    response = client.post("/auth/login", json={"email": user.email, "password": "password123"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user.id


def test_login_wrong_password(client, make_user):
    user = make_user("Liam Login")

    response = client.post("/auth/login", json={"email": user.email, "password": "nope"})

    assert response.status_code == 400


def test_login_deactivated(client, make_user):
    user = make_user("Ida Inactive", is_active=False)

    response = client.post("/auth/login", json={"email": user.email, "password": "password123"})

    assert response.status_code == 401


def test_invalid_and_expired_tokens(client, make_user):
    user = make_user("Tom Token")
    expired = create_access_token({"sub": user.email}, expires_delta=timedelta(minutes=-5))

    assert client.get("/users/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.get("/users/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401
    assert client.get("/users/me").status_code == 401


def test_user_search(client, make_user, auth):
    searcher = make_user("Sue Searcher")
    make_user("Bob Builder")
    make_user("Bobby Tables")
    make_user("Gone Bob", is_active=False)

    response = client.get("/users/search?q=bob", headers=auth(searcher))

    assert response.status_code == 200
    assert [u["name"] for u in response.json()] == ["Bob Builder", "Bobby Tables"]
    assert client.get("/users/search?q=", headers=auth(searcher)).json() == []


def test_update_role(client, make_user, auth):
    admin = make_user("Ada Admin", role="admin")
    user = make_user("Uma User")

    response = client.put(f"/users/{user.id}/role", headers=auth(admin), json={"role": "admin"})
    assert response.status_code == 200
    assert response.json()["role"] == "admin"

    assert client.put(f"/users/{user.id}/role", headers=auth(admin), json={"role": "king"}).status_code == 400
    assert client.put(f"/users/{admin.id}/role", headers=auth(make_user("Pat Plain")), json={"role": "user"}).status_code == 403
