def register(client, email="ada@hackhub.dev", password="correct-horse"):
    return client.post(
        "/api/auth/register",
        json={"name": "Ada Lovelace", "email": email, "password": password},
    )


def test_register_creates_participant(client):
    resp = register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["role"] == "participant"
    assert body["email"] == "ada@hackhub.dev"
    assert "password_hash" not in body


def test_register_rejects_duplicate_email(client):
    register(client)
    resp = register(client, email="ADA@hackhub.dev")
    assert resp.status_code == 409


def test_register_rejects_short_password(client):
    resp = register(client, password="short")
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "Invalid input"
    assert "password" in resp.json()["detail"]["details"]


def test_login_sets_session_and_reports_dashboard(client):
    register(client)
    resp = client.post("/api/auth/login", json={"email": "ada@hackhub.dev", "password": "correct-horse"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["dashboard"] == "/participant"
    assert resp.cookies.get("access_token") == body["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Ada Lovelace"


def test_login_rejects_bad_password(client):
    register(client)
    resp = client.post("/api/auth/login", json={"email": "ada@hackhub.dev", "password": "wrong-password"})
    assert resp.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code in (401, 403)
