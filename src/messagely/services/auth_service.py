"""Authentication flow — register and login.

Learn: Service layer separates business logic from HTTP routing.
Both operations end the same way: issue a token, then record the login.
Nothing is issued unless every earlier step succeeded.

Login never says *why* it failed. Unknown username and wrong password
raise the same InvalidCredentialsError, and an unknown username still
costs one bcrypt verify so response time does not give it away either.
"""

from typing import Optional

import structlog

from messagely.auth.password import MAX_PASSWORD_BYTES, PasswordHasher, password_fits
from messagely.auth.tokens import TokenService
from messagely.errors import (
    InvalidCredentialsError,
    MissingFieldError,
    NotFoundError,
    PasswordTooLongError,
)
from messagely.schemas.user import Profile
from messagely.store.interfaces import CredentialStore

logger = structlog.get_logger()


def require_fields(**fields: Optional[str]) -> None:
    """Raise MissingFieldError naming every absent, empty or blank field."""
    missing = [name for name, value in fields.items() if not (value and value.strip())]
    if missing:
        raise MissingFieldError(missing)


class AuthService:
    """Register and log in users, returning identity tokens."""

    def __init__(
        self,
        credentials: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.credentials = credentials
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self,
        username: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
        phone: Optional[str],
    ) -> str:
        """Create a credential and return a token for it.

        Raises MissingFieldError, PasswordTooLongError, DuplicateUsernameError
        or HashingError.
        """
        require_fields(
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
        )
        if not password_fits(password):
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)
        password_hash = await self.hasher.hash_async(password)
        await self.credentials.create(
            username,
            password_hash,
            Profile(first_name=first_name, last_name=last_name, phone=phone),
        )

        token = self.tokens.issue(username)
        await self.credentials.touch_login(username)
        logger.info("auth.registered", username=username)
        return token

    async def login(self, username: Optional[str], password: Optional[str]) -> str:
        """Check a username/password pair and return a fresh token.

        Raises MissingFieldError or InvalidCredentialsError.
        """
        require_fields(username=username, password=password)

        try:
            credential = await self.credentials.find(username)
        except NotFoundError:
            await self.hasher.dummy_verify_async(password)
            logger.info("auth.login_failed", username=username)
            raise InvalidCredentialsError()

        if not await self.hasher.verify_async(password, credential.password_hash):
            logger.info("auth.login_failed", username=username)
            raise InvalidCredentialsError()

        # Re-hash with the current work factor on successful login
        if self.hasher.needs_rehash(credential.password_hash):
            await self.credentials.update_hash(
                username, await self.hasher.hash_async(password)
            )
            logger.info("auth.password_rehashed", username=username)

        token = self.tokens.issue(username)
        await self.credentials.touch_login(username)
        logger.info("auth.logged_in", username=username)
        return token
