"""FastAPI dependencies for the auth core.

Learn: These are used as Depends() in route handlers. They build the
core objects from settings (the only place settings reach the core),
pick the storage backend, and extract the verified username from the
Authorization header. Tests swap any of them via app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.auth.guard import AuthorizationGuard
from messagely.auth.password import PasswordHasher
from messagely.auth.tokens import TokenService
from messagely.config import settings
from messagely.db.engine import get_db
from messagely.services.auth_service import AuthService
from messagely.services.message_service import MessageService
from messagely.services.user_service import UserService
from messagely.store.interfaces import CredentialStore, MessageStore
from messagely.store.memory import MemoryCredentialStore, MemoryMessageStore
from messagely.store.sql import SqlCredentialStore, SqlMessageStore


# ─── Core singletons ────────────────────────────────────


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.token_expire_minutes,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(
        work_factor=settings.bcrypt_work_factor,
        max_workers=settings.hash_workers,
    )


@lru_cache
def _memory_stores() -> tuple[MemoryCredentialStore, MemoryMessageStore]:
    return MemoryCredentialStore(), MemoryMessageStore()


# ─── Stores ─────────────────────────────────────────────


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    if settings.storage_backend == "memory":
        return _memory_stores()[0]
    return SqlCredentialStore(db)


def get_message_store(db: AsyncSession = Depends(get_db)) -> MessageStore:
    if settings.storage_backend == "memory":
        return _memory_stores()[1]
    return SqlMessageStore(db)


# ─── Services ───────────────────────────────────────────


def get_guard(
    tokens: TokenService = Depends(get_token_service),
    messages: MessageStore = Depends(get_message_store),
) -> AuthorizationGuard:
    return AuthorizationGuard(tokens, messages)


def get_auth_service(
    credentials: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(credentials, hasher, tokens)


def get_message_service(
    messages: MessageStore = Depends(get_message_store),
    credentials: CredentialStore = Depends(get_credential_store),
    guard: AuthorizationGuard = Depends(get_guard),
) -> MessageService:
    return MessageService(messages, credentials, guard)


def get_user_service(
    credentials: CredentialStore = Depends(get_credential_store),
    messages: MessageStore = Depends(get_message_store),
    guard: AuthorizationGuard = Depends(get_guard),
) -> UserService:
    return UserService(credentials, messages, guard)


# ─── Identity ───────────────────────────────────────────


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Pull the token out of `Authorization: Bearer <token>`."""
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return None


def get_current_username(
    token: Optional[str] = Depends(get_bearer_token),
    guard: AuthorizationGuard = Depends(get_guard),
) -> str:
    """Verified (claimed) username, or UnauthenticatedError.

    Learn: Runs as a route dependency, so an unauthenticated request is
    rejected before the handler loads anything from the store.
    """
    return guard.authenticate_request(token)
