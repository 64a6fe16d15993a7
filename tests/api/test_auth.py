"""Tests for registration, login, logout and the session guard."""

import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from homedash.utils import now
from homedash.web.server import create_fastapi_app


class TestRegister:
    def test_register_returns_public_user_and_cookie(self, register):
        response = register("alice", "secret")

        assert response.status_code == 201
        body = response.json()
        assert body["error"] is None
        assert set(body["data"]) == {"id", "username", "createdAt", "updatedAt"}
        assert body["data"]["username"] == "alice"
        assert response.cookies.get("sid")

    def test_duplicate_username_rejected(self, register):
        assert register("alice", "secret").status_code == 201

        response = register("alice", "another")

        assert response.status_code == 400
        assert response.json() == {"data": None, "error": "Username already exists"}

    def test_username_is_trimmed(self, register):
        register("alice", "secret")

        response = register("  alice ", "secret")

        assert response.status_code == 400
        assert response.json()["error"] == "Username already exists"

    @pytest.mark.parametrize("payload", [{}, {"username": "alice"}, {"password": "secret"}, {"username": " ", "password": "x1"}])
    def test_missing_fields(self, client, payload):
        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Username and password required"

    @pytest.mark.parametrize("password", ["a", "correct horse battery", " padded "])
    def test_any_password_accepted(self, client, register, password):
        assert register("alice", password).status_code == 201
        client.cookies.clear()

        response = client.post("/api/auth/login", json={"username": "alice", "password": password})

        assert response.status_code == 200

    def test_password_over_bcrypt_limit_rejected(self, register):
        response = register("alice", "x" * 73)

        assert response.status_code == 400
        assert response.json() == {"data": None, "error": "Password must be at most 72 bytes long"}

    def test_password_limit_counts_bytes(self, register):
        assert register("alice", "\u00e9" * 36).status_code == 201
        assert register("bob", "\u00e9" * 37).status_code == 400

    def test_cookie_attributes(self, register):
        response = register()

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("sid=")
        assert "HttpOnly" in set_cookie
        assert "SameSite=lax" in set_cookie
        assert "Path=/" in set_cookie
        assert "Max-Age=604800" in set_cookie
        assert "Secure" not in set_cookie


class TestLogin:
    def test_login_sets_cookie_and_returns_profile(self, client, alice):
        client.cookies.clear()

        response = client.post("/api/auth/login", json={"username": "alice", "password": "secret"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == alice["id"]
        assert "passwordHash" not in data
        assert "password_hash" not in data
        assert response.cookies.get("sid")
        assert client.get("/api/me").json()["data"]["username"] == "alice"

    def test_each_login_opens_new_session(self, client, alice):
        first = client.cookies.get("sid")

        client.post("/api/auth/login", json={"username": "alice", "password": "secret"})

        assert client.cookies.get("sid") != first

    @pytest.mark.parametrize(("username", "password"), [("alice", "wrong"), ("nobody", "secret")])
    def test_bad_credentials_look_the_same(self, client, alice, username, password):
        client.cookies.clear()

        response = client.post("/api/auth/login", json={"username": username, "password": password})

        assert response.status_code == 401
        assert response.json() == {"data": None, "error": "Invalid username or password"}
        assert "sid" not in response.cookies

    @pytest.mark.parametrize("username", ["alice", "nobody"])
    def test_overlong_password_is_invalid_credentials(self, client, alice, username):
        client.cookies.clear()

        response = client.post("/api/auth/login", json={"username": username, "password": "x" * 100})

        assert response.status_code == 401
        assert response.json() == {"data": None, "error": "Invalid username or password"}

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"username": "alice"})

        assert response.status_code == 400
        assert response.json()["error"] == "Username and password required"


class TestLogout:
    def test_logout_destroys_session(self, client, alice):
        token = client.cookies.get("sid")

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"data": {"success": True}, "error": None}
        assert client.get("/api/me").json()["error"] == "Authentication required"

        client.cookies.set("sid", token)
        response = client.get("/api/me")
        assert response.status_code == 401
        assert response.json()["error"] == "Session expired"

    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["data"] == {"success": True}


class TestSessionGuard:
    def test_me_returns_current_user(self, client, alice):
        response = client.get("/api/me")

        assert response.status_code == 200
        assert response.json() == {"data": alice, "error": None}

    def test_missing_cookie(self, client):
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json() == {"data": None, "error": "Authentication required"}

    def test_unknown_session(self, client):
        client.cookies.set("sid", "not-a-real-token")

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "Session expired"

    def test_idle_session_expires(self, client, database, alice):
        token = client.cookies.get("sid")
        sessions = database.get_collection("sessions")
        asyncio.run(sessions.update_one({"_id": token}, {"$set": {"updated_at": now() - timedelta(days=8)}}))

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "Session expired"

    def test_requests_refresh_session(self, client, database, alice):
        token = client.cookies.get("sid")
        sessions = database.get_collection("sessions")
        stale = now() - timedelta(days=6)
        asyncio.run(sessions.update_one({"_id": token}, {"$set": {"updated_at": stale}}))

        assert client.get("/api/me").status_code == 200

        session = asyncio.run(sessions.find_one({"_id": token}))
        assert session["updated_at"] > stale + timedelta(days=5)

    def test_session_of_deleted_user_is_destroyed(self, client, database, alice):
        token = client.cookies.get("sid")
        asyncio.run(database.get_collection("users").delete_one({"_id": alice["id"]}))

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "User no longer exists"
        assert asyncio.run(database.get_collection("sessions").find_one({"_id": token})) is None
        assert client.get("/api/me").json()["error"] == "Session expired"


class TestDeleteAccount:
    def test_delete_account_removes_user_data_and_sessions(self, client, register, database, alice):
        client.post("/api/todos", json={"text": "Buy milk"})
        token = client.cookies.get("sid")

        response = client.delete("/api/me")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == alice["id"]
        assert asyncio.run(database.get_collection("todos").count_documents({"user_id": alice["id"]})) == 0

        client.cookies.set("sid", token)
        assert client.get("/api/me").json()["error"] == "Session expired"

        client.cookies.clear()
        assert register("alice", "secret").status_code == 201


def test_secure_cookie_in_production(config, app_instance):
    production = config.model_copy(update={"production": True})
    app_instance._core.config = production
    with TestClient(create_fastapi_app(app_instance, production)) as client:
        response = client.post("/api/auth/register", json={"username": "alice", "password": "secret"})

    assert response.status_code == 201
    assert "Secure" in response.headers["set-cookie"]
