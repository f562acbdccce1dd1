"""SQLAlchemy-backed stores.

Learn: One store call = one statement + one commit. Registration relies
on the users primary key: a duplicate username surfaces as an
IntegrityError from the INSERT, which becomes DuplicateUsernameError.
mark_read is a conditional UPDATE (... WHERE read_at IS NULL), so two
concurrent calls cannot overwrite the first timestamp.
"""

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.db.models import Message as MessageRow
from messagely.db.models import User as UserRow
from messagely.db.models import utcnow
from messagely.errors import DuplicateUsernameError, NotFoundError
from messagely.schemas.message import Message
from messagely.schemas.user import Credential, Profile, PublicUser


class SqlCredentialStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, username: str, password_hash: str, profile: Profile
    ) -> Credential:
        # Core INSERT, not session.add(): a username already in the identity
        # map would otherwise fail in the ORM before reaching the database.
        values = dict(
            username=username,
            password_hash=password_hash,
            join_at=utcnow(),
            **profile.model_dump(),
        )
        try:
            await self.db.execute(insert(UserRow).values(**values))
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUsernameError(username)
        return Credential(**values)

    async def find(self, username: str) -> Credential:
        user = await self.db.get(UserRow, username)
        if user is None:
            raise NotFoundError("user", username)
        return Credential.model_validate(user)

    async def touch_login(self, username: str) -> None:
        await self.db.execute(
            update(UserRow)
            .where(UserRow.username == username)
            .values(last_login_at=utcnow())
        )
        await self.db.commit()

    async def update_hash(self, username: str, password_hash: str) -> None:
        await self.db.execute(
            update(UserRow)
            .where(UserRow.username == username)
            .values(password_hash=password_hash)
        )
        await self.db.commit()

    async def list_public(self) -> list[PublicUser]:
        result = await self.db.execute(select(UserRow).order_by(UserRow.username))
        return [PublicUser.model_validate(u) for u in result.scalars().all()]


class SqlMessageStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, from_username: str, to_username: str, body: str) -> Message:
        message = MessageRow(
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=utcnow(),
            read_at=None,
        )
        self.db.add(message)
        await self.db.commit()
        return Message.model_validate(message)

    async def get(self, message_id: int) -> Message:
        message = await self.db.get(MessageRow, message_id)
        if message is None:
            raise NotFoundError("message", message_id)
        return Message.model_validate(message)

    async def mark_read(self, message_id: int) -> Message:
        await self.db.execute(
            update(MessageRow)
            .where(MessageRow.id == message_id, MessageRow.read_at.is_(None))
            .values(read_at=utcnow())
        )
        await self.db.commit()
        # populate_existing: the identity map may hold a stale read_at
        message = await self.db.get(
            MessageRow, message_id, populate_existing=True
        )
        if message is None:
            raise NotFoundError("message", message_id)
        return Message.model_validate(message)

    async def list_from(self, username: str) -> list[Message]:
        result = await self.db.execute(
            select(MessageRow)
            .where(MessageRow.from_username == username)
            .order_by(MessageRow.id)
        )
        return [Message.model_validate(m) for m in result.scalars().all()]

    async def list_to(self, username: str) -> list[Message]:
        result = await self.db.execute(
            select(MessageRow)
            .where(MessageRow.to_username == username)
            .order_by(MessageRow.id)
        )
        return [Message.model_validate(m) for m in result.scalars().all()]
