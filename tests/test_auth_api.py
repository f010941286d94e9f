import pytest

import firebase_app

USER = {"name": "Rodela Admin", "email": "owner@example.com", "password": "secret123"}


@pytest.fixture
def registered(client):
    resp = client.post("/api/auth/register", json=USER)
    assert resp.status_code == 201
    return resp.json()["data"]


def test_register_hides_password(registered):
    assert registered["email"] == USER["email"]
    assert registered["role"] == "user"
    assert "password" not in registered
    assert registered["id"]


def test_register_duplicate(client, registered):
    resp = client.post("/api/auth/register", json=USER)
    assert resp.status_code == 400
    assert resp.json()["error"] == "User already exists"


@pytest.mark.parametrize("payload", [
    {**USER, "name": "R"},
    {**USER, "email": "not-an-email"},
    {**USER, "password": "123"},
])
def test_register_invalid_input(client, payload):
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input"


def test_login(client, registered):
    resp = client.post("/api/auth/login", json={"email": USER["email"], "password": USER["password"]})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["email"] == USER["email"]
    assert "password" not in data


def test_login_wrong_password(client, registered):
    resp = client.post("/api/auth/login", json={"email": USER["email"], "password": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid credentials"


def test_login_unknown_user(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert resp.status_code == 401


def test_profile_roundtrip(client, registered):
    resp = client.put("/api/profile", json={
        "email": USER["email"],
        "phone": "01711223344",
        "role": "admin",
        "password": "hijack",
        "address_book": [{"full_name": "Rodela", "city": "Dhaka", "is_default_shipping": True}],
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["phone"] == "01711223344"
    assert data["role"] == "user"
    assert data["address_book"][0]["city"] == "Dhaka"

    login = client.post("/api/auth/login", json={"email": USER["email"], "password": USER["password"]})
    assert login.status_code == 200


def test_profile_requires_email(client):
    assert client.get("/api/profile").json()["error"] == "Email is required"
    assert client.get("/api/profile", params={"email": "x@example.com"}).status_code == 404


def test_users_update_role_and_delete(client, registered, db):
    users = client.get("/api/users").json()["data"]
    assert len(users) == 1 and "password" not in users[0]

    resp = client.put("/api/users", json={"userId": registered["id"], "action": "update_role", "role": "manager"})
    assert resp.json()["data"]["role"] == "manager"

    bad_role = client.put("/api/users", json={"userId": registered["id"], "action": "update_role", "role": "owner"})
    assert bad_role.status_code == 400
    assert bad_role.json()["error"] == "Invalid role"

    bad_action = client.put("/api/users", json={"userId": registered["id"], "action": "promote"})
    assert bad_action.json()["error"] == "Invalid action"

    bad_id = client.put("/api/users", json={"userId": "nope", "action": "delete_user"})
    assert bad_id.status_code == 400

    resp = client.put("/api/users", json={"userId": registered["id"], "action": "delete_user"})
    assert resp.status_code == 200
    assert db["user"].count_documents({}) == 0


def test_firebase_login(client, monkeypatch):
    def fake_verify(token):
        if token != "good":
            raise PermissionError("Invalid Firebase token")
        return {"uid": "u1", "email": "staff@rodela.com", "name": "staff", "phone": None, "is_admin": True}

    monkeypatch.setattr(firebase_app, "verify_login", fake_verify)
    ok = client.post("/api/auth/firebase", json={"id_token": "good"})
    assert ok.json()["data"]["is_admin"] is True
    bad = client.post("/api/auth/firebase", json={"id_token": "bad"})
    assert bad.status_code == 401


def test_firebase_not_configured(client, monkeypatch):
    monkeypatch.setattr(firebase_app.config, "FIREBASE_CREDENTIALS", None)
    monkeypatch.setattr(firebase_app, "_app", None)
    resp = client.post("/api/auth/firebase", json={"id_token": "anything"})
    assert resp.status_code == 503


def test_is_admin_email(monkeypatch):
    monkeypatch.setattr(firebase_app.config, "ADMIN_EMAIL", "boss@gmail.com")
    assert firebase_app.is_admin_email("admin@rodela.com")
    assert firebase_app.is_admin_email("someone@rodela.com")
    assert firebase_app.is_admin_email("Boss@gmail.com")
    assert not firebase_app.is_admin_email("someone@gmail.com")
    assert not firebase_app.is_admin_email(None)


@pytest.mark.parametrize("payload", [
    {"gender": "banana"},
    {"birthday": "nope"},
    {"address_book": [{"is_default_shipping": "maybe"}]},
])
def test_profile_rejects_invalid_fields(client, registered, payload):
    resp = client.put("/api/profile", json={"email": USER["email"], **payload})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input"


def test_profile_drops_unknown_fields(client, registered, db):
    resp = client.put("/api/profile", json={
        "email": USER["email"], "gender": "female", "birthday": "1995-04-12", "is_admin": True,
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["gender"] == "female"
    assert data["birthday"] == "1995-04-12"
    assert "is_admin" not in data
    assert "is_admin" not in db["user"].find_one({"email": USER["email"]})
