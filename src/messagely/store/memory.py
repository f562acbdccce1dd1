"""In-process stores backed by dicts.

Learn: Each method runs without awaiting in the middle of a
read-modify-write, so on a single event loop every operation is atomic,
which is all the uniqueness and mark-read rules need.
"""

from datetime import datetime, timezone
from itertools import count

from messagely.errors import DuplicateUsernameError, NotFoundError
from messagely.schemas.message import Message
from messagely.schemas.user import Credential, Profile, PublicUser


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCredentialStore:
    def __init__(self):
        self._users: dict[str, Credential] = {}

    async def create(
        self, username: str, password_hash: str, profile: Profile
    ) -> Credential:
        if username in self._users:
            raise DuplicateUsernameError(username)
        credential = Credential(
            username=username,
            password_hash=password_hash,
            join_at=utcnow(),
            **profile.model_dump(),
        )
        self._users[username] = credential
        return credential.model_copy()

    async def find(self, username: str) -> Credential:
        try:
            return self._users[username].model_copy()
        except KeyError:
            raise NotFoundError("user", username)

    async def touch_login(self, username: str) -> None:
        user = self._users.get(username)
        if user is not None:
            user.last_login_at = utcnow()

    async def update_hash(self, username: str, password_hash: str) -> None:
        user = self._users.get(username)
        if user is not None:
            user.password_hash = password_hash

    async def list_public(self) -> list[PublicUser]:
        return [self._users[name].public() for name in sorted(self._users)]

    def __len__(self) -> int:
        return len(self._users)


class MemoryMessageStore:
    def __init__(self):
        self._messages: dict[int, Message] = {}
        self._ids = count(1)

    async def create(self, from_username: str, to_username: str, body: str) -> Message:
        message = Message(
            id=next(self._ids),
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=utcnow(),
        )
        self._messages[message.id] = message
        return message.model_copy()

    async def get(self, message_id: int) -> Message:
        try:
            return self._messages[message_id].model_copy()
        except KeyError:
            raise NotFoundError("message", message_id)

    async def mark_read(self, message_id: int) -> Message:
        message = self._messages.get(message_id)
        if message is None:
            raise NotFoundError("message", message_id)
        if message.read_at is None:
            message.read_at = utcnow()
        return message.model_copy()

    async def list_from(self, username: str) -> list[Message]:
        return [
            m.model_copy() for m in self._messages.values()
            if m.from_username == username
        ]

    async def list_to(self, username: str) -> list[Message]:
        return [
            m.model_copy() for m in self._messages.values()
            if m.to_username == username
        ]

    def __len__(self) -> int:
        return len(self._messages)
