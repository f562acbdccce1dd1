"""User directory — public listing, profile, inbox and outbox.

Learn: Listing needs any logged-in identity. A user's own profile and
messages are only visible to that same user.
"""

from typing import Optional

from messagely.auth.guard import AuthorizationGuard
from messagely.schemas.message import ReceivedMessage, SentMessage
from messagely.schemas.user import PublicUser, UserDetail
from messagely.store.interfaces import CredentialStore, MessageStore


class UserService:
    def __init__(
        self,
        credentials: CredentialStore,
        messages: MessageStore,
        guard: AuthorizationGuard,
    ):
        self.credentials = credentials
        self.messages = messages
        self.guard = guard

    async def list_users(self, identity: Optional[str]) -> list[PublicUser]:
        self.guard.ensure_logged_in(identity)
        return await self.credentials.list_public()

    async def get_user(self, identity: Optional[str], username: str) -> UserDetail:
        self.guard.ensure_same_user(identity, username)
        credential = await self.credentials.find(username)
        return credential.detail()

    async def messages_from(
        self, identity: Optional[str], username: str
    ) -> list[SentMessage]:
        self.guard.ensure_same_user(identity, username)
        users = await self._public_users()
        return [
            SentMessage(
                id=m.id,
                to_user=users[m.to_username],
                body=m.body,
                sent_at=m.sent_at,
                read_at=m.read_at,
            )
            for m in await self.messages.list_from(username)
        ]

    async def messages_to(
        self, identity: Optional[str], username: str
    ) -> list[ReceivedMessage]:
        self.guard.ensure_same_user(identity, username)
        users = await self._public_users()
        return [
            ReceivedMessage(
                id=m.id,
                from_user=users[m.from_username],
                body=m.body,
                sent_at=m.sent_at,
                read_at=m.read_at,
            )
            for m in await self.messages.list_to(username)
        ]

    async def _public_users(self) -> dict[str, PublicUser]:
        return {u.username: u for u in await self.credentials.list_public()}
