"""Test fixtures: in-memory stores, a per-test signing key, cheap bcrypt.

Learn: Every test builds its own core objects:
1. TokenService with a fresh random key (tokens never leak across tests)
2. PasswordHasher at bcrypt cost 4 (the minimum, so tests stay fast)
3. Memory stores, wired into the app through dependency_overrides

SQL store tests get a private in-memory SQLite database via aiosqlite.
"""

import secrets

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from messagely.auth.dependencies import (
    get_credential_store,
    get_message_store,
    get_password_hasher,
    get_token_service,
)
from messagely.auth.guard import AuthorizationGuard
from messagely.auth.password import PasswordHasher
from messagely.auth.tokens import TokenService
from messagely.db.engine import build_session_factory, create_tables
from messagely.main import app
from messagely.services.auth_service import AuthService
from messagely.services.message_service import MessageService
from messagely.services.user_service import UserService
from messagely.store.memory import MemoryCredentialStore, MemoryMessageStore


def profile_for(username: str) -> dict:
    return {
        "first_name": username.capitalize(),
        "last_name": "Tester",
        "phone": "+15550001111",
    }


@pytest.fixture()
def token_service():
    return TokenService(secret=secrets.token_urlsafe(32))


@pytest.fixture()
def hasher():
    h = PasswordHasher(work_factor=4, max_workers=2)
    yield h
    h.shutdown()


@pytest.fixture()
def credentials():
    return MemoryCredentialStore()


@pytest.fixture()
def messages():
    return MemoryMessageStore()


@pytest.fixture()
def guard(token_service, messages):
    return AuthorizationGuard(token_service, messages)


@pytest.fixture()
def auth_service(credentials, hasher, token_service):
    return AuthService(credentials, hasher, token_service)


@pytest.fixture()
def message_service(messages, credentials, guard):
    return MessageService(messages, credentials, guard)


@pytest.fixture()
def user_service(credentials, messages, guard):
    return UserService(credentials, messages, guard)


@pytest.fixture()
def register(auth_service):
    """Register a user with a full profile; returns their token."""

    async def _register(username: str, password: str = "s3cret") -> str:
        return await auth_service.register(
            username=username, password=password, **profile_for(username)
        )

    return _register


@pytest_asyncio.fixture()
async def client(credentials, messages, hasher, token_service):
    """HTTP client with stores, hasher and signing key overridden.

    Learn: The real auth pipeline runs (no identity override), so tests
    register + login through the API and send real bearer tokens.
    """
    app.dependency_overrides[get_credential_store] = lambda: credentials
    app.dependency_overrides[get_message_store] = lambda: messages
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_service] = lambda: token_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def db_session():
    """Session on a private in-memory SQLite database with fresh tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()
