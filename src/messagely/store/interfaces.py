"""Store interfaces.

Services depend on these protocols, not on a concrete backend. Each
method is one atomic store interaction.
"""

from typing import Protocol, runtime_checkable

from messagely.schemas.message import Message
from messagely.schemas.user import Credential, Profile, PublicUser


@runtime_checkable
class CredentialStore(Protocol):
    """Username → password hash + profile."""

    async def create(
        self, username: str, password_hash: str, profile: Profile
    ) -> Credential:
        """
        Insert a new credential.

        Uniqueness is enforced by the store itself (an atomic insert
        against a unique key), never by a prior lookup.

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        ...

    async def find(self, username: str) -> Credential:
        """
        Raises:
            NotFoundError: If no such user exists
        """
        ...

    async def touch_login(self, username: str) -> None:
        """Set last_login_at to now. Only call after a successful verify."""
        ...

    async def update_hash(self, username: str, password_hash: str) -> None:
        """Replace the stored hash (work factor migration)."""
        ...

    async def list_public(self) -> list[PublicUser]:
        """All users ordered by username, without password hashes."""
        ...


@runtime_checkable
class MessageStore(Protocol):
    """Directed messages between registered users."""

    async def create(self, from_username: str, to_username: str, body: str) -> Message:
        """Insert a message with sent_at = now and read_at unset."""
        ...

    async def get(self, message_id: int) -> Message:
        """
        Raises:
            NotFoundError: If no such message exists
        """
        ...

    async def mark_read(self, message_id: int) -> Message:
        """
        Set read_at to now if it is unset, then return the message.

        A message that is already read keeps its original read_at.

        Raises:
            NotFoundError: If no such message exists
        """
        ...

    async def list_from(self, username: str) -> list[Message]:
        ...

    async def list_to(self, username: str) -> list[Message]:
        ...
