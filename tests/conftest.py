"""Pytest configuration and fixtures for wordbox tests."""

import os
from collections.abc import AsyncGenerator
from datetime import timedelta
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app modules
os.environ["JWT_SECRET_KEY"] = "0" * 64
os.environ["CREDENTIAL_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "DEBUG"

from wordbox.core.database import create_session_factory, create_tables  # noqa: E402
from wordbox.services.auth import SessionManager, TokenConfig  # noqa: E402
from wordbox.services.password import Argon2PasswordHasher  # noqa: E402
from wordbox.services.sql_store import SqlAlchemyStore  # noqa: E402
from wordbox.services.store import MemoryStore, StoreError  # noqa: E402

TEST_KEY = b"wordbox-test-signing-key-32-bytes!!"


class FailingStore:
    """Credential store whose every call fails like a broken backend."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise StoreError(f"{operation}: connection refused")

    async def load(self, name: str) -> str:
        self._fail("load")

    async def save(self, name: str, data: str) -> None:
        self._fail("save")

    async def name_exists(self, name: str) -> bool:
        self._fail("name_exists")

    async def remove(self, name: str) -> None:
        self._fail("remove")

    async def add_token(self, token: str) -> bool:
        self._fail("add_token")

    async def token_exists(self, token: str) -> bool:
        self._fail("token_exists")

    async def remove_token(self, token: str) -> None:
        self._fail("remove_token")


@pytest.fixture
def hasher() -> Argon2PasswordHasher:
    """Argon2 hasher with minimal cost so tests stay fast."""
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(key=TEST_KEY, lifetime=timedelta(minutes=1))


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest_asyncio.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[SqlAlchemyStore, None]:
    """SQLAlchemy store over a fresh sqlite file."""
    session_factory = create_session_factory(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await create_tables(session_factory.kw["bind"])
    store = SqlAlchemyStore(session_factory)
    yield store
    await store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sql_store):
    """Each credential store backend in turn."""
    if request.param == "memory":
        return memory_store
    return sql_store


@pytest.fixture
def manager(memory_store, token_config, hasher) -> SessionManager:
    return SessionManager(memory_store, token_config, hasher=hasher)


@pytest.fixture
def store_manager(store, token_config, hasher) -> SessionManager:
    """Session manager over each credential store backend in turn."""
    return SessionManager(store, token_config, hasher=hasher)


@pytest.fixture
def make_manager(memory_store, hasher):
    """Factory for session managers with a custom token lifetime or store."""

    def _make(
        lifetime: timedelta = timedelta(minutes=1),
        store=None,
        key: bytes = TEST_KEY,
    ) -> SessionManager:
        return SessionManager(
            store if store is not None else memory_store,
            TokenConfig(key=key, lifetime=lifetime),
            hasher=hasher,
        )

    return _make


@pytest.fixture
def translator() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def memory_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def app(manager, translator, memory_client):
    """Application with services wired onto app.state.

    ASGITransport does not run the lifespan, so nothing is built at startup.
    """
    from wordbox.main import create_app

    app = create_app()
    app.state.store_backend = "memory"
    app.state.session_manager = manager
    app.state.translator = translator
    app.state.memory_client = memory_client
    return app


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_headers(async_client) -> dict[str, str]:
    """Register a user and return Authorization headers for it."""
    await async_client.post("/api/user/add", json={"name": "adam", "password": "pwd"})
    response = await async_client.post("/api/user/login", json={"name": "adam", "password": "pwd"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
