from fastapi.testclient import TestClient

from invoicer.app.core.security import create_access_token, decode_access_token
from invoicer.app.models.user import User


def signup(client: TestClient, username: str, password: str):
    return client.post("/api/auth/signup", json={"username": username, "password": password})


def test_signup_returns_token_and_user(client):
    response = signup(client, "alice", "secret1")
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["username"] == "alice"
    assert isinstance(data["user"]["id"], int)
    assert "password" not in data["user"]
    assert "hashed_password" not in data["user"]
    assert decode_access_token(data["token"]).user_id == data["user"]["id"]


def test_signup_then_login_resolves_same_user(client):
    user_id = signup(client, "alice", "secret1").json()["user"]["id"]
    response = client.post("/api/auth/login", json={"username": "alice", "password": "secret1"})
    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {"id": user_id, "username": "alice"}
    assert decode_access_token(data["token"]).user_id == user_id


def test_duplicate_username_returns_409_regardless_of_password(client):
    assert signup(client, "dup", "secret1").status_code == 201
    second = signup(client, "dup", "another-password")
    assert second.status_code == 409
    assert second.json() == {"error": "Username already exists"}


def test_usernames_are_case_sensitive(client):
    assert signup(client, "Bob", "secret1").status_code == 201
    assert signup(client, "bob", "secret1").status_code == 201


def test_short_password_returns_400(client):
    response = signup(client, "shorty", "12345")
    assert response.status_code == 400
    assert "at least 6" in response.json()["error"]


def test_blank_username_returns_400(client):
    assert signup(client, "   ", "secret1").status_code == 400


def test_wrong_password_returns_401(client):
    signup(client, "wrongpw", "secret1")
    response = client.post("/api/auth/login", json={"username": "wrongpw", "password": "bad-password"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid username or password"


def test_nonexistent_user_returns_401(client):
    response = client.post("/api/auth/login", json={"username": "nosuch", "password": "secret1"})
    assert response.status_code == 401


def test_missing_hash_returns_401_not_500(client, app):
    signup(client, "badhash", "secret1")
    with app.state.database.session() as db:
        user = db.query(User).filter(User.username == "badhash").first()
        user.hashed_password = None
        db.commit()
    response = client.post("/api/auth/login", json={"username": "badhash", "password": "secret1"})
    assert response.status_code == 401


def test_me_returns_current_user(client):
    token = signup(client, "me", "secret1").json()["token"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "me"
    assert isinstance(data.get("id"), int)


def test_me_without_token_returns_401(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert "error" in response.json()


def test_me_with_invalid_token_returns_401(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer invalid"})
    assert response.status_code == 401


def test_me_with_non_bearer_scheme_returns_401(client):
    token = signup(client, "basic", "secret1").json()["token"]
    response = client.get("/api/auth/me", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401


def test_expired_token_returns_401(client, settings):
    user_id = signup(client, "expired", "secret1").json()["user"]["id"]
    token = create_access_token(user_id, "expired", settings=settings, expires_minutes=-1)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_deleted_user_returns_401(client, app):
    data = signup(client, "gone", "secret1").json()
    with app.state.database.session() as db:
        db.query(User).filter(User.id == data["user"]["id"]).delete()
        db.commit()
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert response.status_code == 401
    assert response.json() == {"error": "User not found"}
