"""Message service — send, read, and mark messages read.

Every operation takes the identity the guard verified. Reads and
mark-read go through AuthorizationGuard.load_message, so the rule table
in auth.guard is the only place access is decided.
"""

from typing import Optional

import structlog

from messagely.auth.guard import AuthorizationGuard, MessageAction
from messagely.errors import NotFoundError, UnauthenticatedError
from messagely.schemas.message import (
    Message,
    MessageDetail,
    MessageSummary,
    ReadReceipt,
)
from messagely.services.auth_service import require_fields
from messagely.store.interfaces import CredentialStore, MessageStore

logger = structlog.get_logger()


class MessageService:
    def __init__(
        self,
        messages: MessageStore,
        credentials: CredentialStore,
        guard: AuthorizationGuard,
    ):
        self.messages = messages
        self.credentials = credentials
        self.guard = guard

    async def send(
        self,
        sender: Optional[str],
        to_username: Optional[str],
        body: Optional[str],
    ) -> MessageSummary:
        """Send a message from `sender`.

        A verified token is only a claim, so the sender is re-resolved
        against the credential store before anything is written.
        """
        self.guard.ensure_logged_in(sender)
        require_fields(to_username=to_username, body=body)

        try:
            await self.credentials.find(sender)
        except NotFoundError:
            raise UnauthenticatedError("Unknown user in token")
        # Raises NotFoundError for an unknown recipient
        await self.credentials.find(to_username)

        message = await self.messages.create(sender, to_username, body)
        logger.info(
            "messages.sent",
            message_id=message.id,
            from_username=sender,
            to_username=to_username,
        )
        return MessageSummary(
            id=message.id,
            from_username=message.from_username,
            to_username=message.to_username,
            body=message.body,
            sent_at=message.sent_at,
        )

    async def get(self, identity: Optional[str], message_id: int) -> Message:
        return await self.guard.load_message(identity, message_id, MessageAction.VIEW)

    async def get_detail(self, identity: Optional[str], message_id: int) -> MessageDetail:
        """One message with both participants expanded."""
        message = await self.get(identity, message_id)
        from_user = await self.credentials.find(message.from_username)
        to_user = await self.credentials.find(message.to_username)
        return MessageDetail(
            id=message.id,
            body=message.body,
            sent_at=message.sent_at,
            read_at=message.read_at,
            from_user=from_user.public(),
            to_user=to_user.public(),
        )

    async def mark_read(self, identity: Optional[str], message_id: int) -> ReadReceipt:
        """Mark a message read. Only the recipient may do this.

        Marking an already-read message is a no-op that returns the
        original read_at.
        """
        await self.guard.load_message(identity, message_id, MessageAction.MARK_READ)
        message = await self.messages.mark_read(message_id)
        logger.info("messages.read", message_id=message_id, username=identity)
        return ReadReceipt(id=message.id, read_at=message.read_at)
