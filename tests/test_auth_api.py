"""Tests for the user API endpoints."""

import asyncio
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from wordbox.core.config import Settings
from wordbox.main import create_app
from wordbox.services.store import MemoryStore

pytestmark = pytest.mark.asyncio


class TestAddUser:
    """Tests for POST /api/user/add."""

    async def test_add_user(self, async_client, memory_store):
        response = await async_client.post(
            "/api/user/add", json={"name": "adam", "password": "pwd"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["name"] == "adam"
        assert await memory_store.name_exists("adam")
        assert await memory_store.load("adam") != "pwd"

    async def test_add_existing_user(self, async_client):
        await async_client.post("/api/user/add", json={"name": "adam", "password": "pwd"})

        response = await async_client.post(
            "/api/user/add", json={"name": "adam", "password": "other"}
        )

        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    @pytest.mark.parametrize(
        "payload",
        [{"name": "", "password": "pwd"}, {"name": "adam", "password": ""}],
    )
    async def test_add_empty_fields(self, async_client, payload):
        response = await async_client.post("/api/user/add", json=payload)

        assert response.status_code == 400

    async def test_add_missing_field(self, async_client):
        response = await async_client.post("/api/user/add", json={"name": "adam"})

        assert response.status_code == 422


class TestLogin:
    """Tests for POST /api/user/login."""

    async def test_login_success(self, async_client):
        await async_client.post("/api/user/add", json={"name": "adam", "password": "pwd"})

        response = await async_client.post(
            "/api/user/login", json={"name": "adam", "password": "pwd"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 60
        assert data["access_token"].count(".") == 2

    async def test_login_wrong_password(self, async_client):
        await async_client.post("/api/user/add", json={"name": "adam", "password": "pwd"})

        response = await async_client.post(
            "/api/user/login", json={"name": "adam", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid name or password"

    async def test_login_unknown_user_looks_like_wrong_password(self, async_client):
        response = await async_client.post(
            "/api/user/login", json={"name": "ghost", "password": "pwd"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid name or password"


class TestCurrentUser:
    """Tests for token-protected /api/user/me."""

    async def test_me(self, async_client, auth_headers):
        response = await async_client.get("/api/user/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"name": "adam"}

    async def test_me_without_token(self, async_client):
        response = await async_client.get("/api/user/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer ", "Bearer not-a-jwt"])
    async def test_me_with_bad_header(self, async_client, header):
        response = await async_client.get("/api/user/me", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_me_with_expired_token(self, async_client, manager, make_manager):
        short = make_manager(lifetime=timedelta(microseconds=1))
        await manager.register("eve", "pwd")
        token = await short.issue_token("eve", "pwd")
        await asyncio.sleep(0.01)

        response = await async_client.get(
            "/api/user/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    async def test_me_with_foreign_key_token(self, async_client, make_manager):
        other = make_manager(key=b"another-signing-key-also-32-bytes!!")
        await other.register("eve", "pwd")
        token = await other.issue_token("eve", "pwd")

        response = await async_client.get(
            "/api/user/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"


class TestLogout:
    """Tests for POST /api/user/logout."""

    async def test_logout_revokes_token(self, async_client, auth_headers):
        response = await async_client.post("/api/user/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "adam"

        response = await async_client.get("/api/user/me", headers=auth_headers)
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has been revoked"

    async def test_logout_twice(self, async_client, auth_headers):
        await async_client.post("/api/user/logout", headers=auth_headers)

        response = await async_client.post("/api/user/logout", headers=auth_headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has been revoked"

    async def test_other_sessions_stay_valid(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/user/login", json={"name": "adam", "password": "pwd"}
        )
        second = {"Authorization": f"Bearer {response.json()['access_token']}"}

        await async_client.post("/api/user/logout", headers=auth_headers)

        response = await async_client.get("/api/user/me", headers=second)
        assert response.status_code == 200


class TestDeleteUser:
    """Tests for DELETE /api/user/me."""

    async def test_delete_me(self, async_client, auth_headers, memory_store: MemoryStore):
        response = await async_client.delete("/api/user/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "User removed", "name": "adam"}
        assert not await memory_store.name_exists("adam")

        response = await async_client.post(
            "/api/user/login", json={"name": "adam", "password": "pwd"}
        )
        assert response.status_code == 401

    async def test_name_can_be_registered_again(self, async_client, auth_headers):
        await async_client.delete("/api/user/me", headers=auth_headers)

        response = await async_client.post(
            "/api/user/add", json={"name": "adam", "password": "new"}
        )

        assert response.status_code == 201


class TestStoreUnavailable:
    """Store failures surface as 503 without leaking details."""

    async def test_add_user_with_broken_store(
        self, app, async_client, make_manager, failing_store
    ):
        app.state.session_manager = make_manager(store=failing_store)

        response = await async_client.post(
            "/api/user/add", json={"name": "adam", "password": "pwd"}
        )

        assert response.status_code == 503
        assert response.json()["detail"] == "Credential store unavailable"


class TestHealth:
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["credential_store"] == "memory"

    async def test_health_reports_configured_version(self, manager):
        app = create_app(Settings(app_version="9.9.9"))
        app.state.store_backend = "database"
        app.state.session_manager = manager
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.json()["version"] == "9.9.9"
        assert response.json()["credential_store"] == "database"
