"""Authorization guard — who may see or change what.

Learn: Checks are plain functions returning a Decision, so the rules
can be read, composed and tested without a request object. The ensure_*
wrappers turn a denial into the typed failure for the dispatcher.

Rule table for a message from A to B:
    VIEW       → A or B
    MARK_READ  → B only (a sender cannot mark their own message read)

Order for message routes: identity first (no store access without a
verified identity), then load the message (NotFound before any rule
runs), then the rule.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from messagely.auth.tokens import TokenError, TokenService
from messagely.errors import FailureKind, ForbiddenError, UnauthenticatedError
from messagely.schemas.message import Message
from messagely.store.interfaces import MessageStore


class MessageAction(str, Enum):
    VIEW = "view"
    MARK_READ = "mark_read"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    failure: Optional[FailureKind] = None
    reason: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, failure: FailureKind, reason: str) -> "Decision":
        return cls(allowed=False, failure=failure, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed

    def raise_if_denied(self) -> None:
        if self.allowed:
            return
        if self.failure is FailureKind.UNAUTHENTICATED:
            raise UnauthenticatedError(self.reason)
        raise ForbiddenError(self.reason)


# ─── Pure decisions ─────────────────────────────────────


def is_logged_in(identity: Optional[str]) -> Decision:
    if not identity:
        return Decision.deny(FailureKind.UNAUTHENTICATED, "Authentication required")
    return Decision.allow()


def can_view(identity: str, message: Message) -> Decision:
    if identity in message.participants:
        return Decision.allow()
    return Decision.deny(FailureKind.FORBIDDEN, "Cannot read this message")


def can_mark_read(identity: str, message: Message) -> Decision:
    if identity == message.to_username:
        return Decision.allow()
    return Decision.deny(
        FailureKind.FORBIDDEN, "Only the recipient can mark this message as read"
    )


def can_access_user(identity: str, username: str) -> Decision:
    if identity == username:
        return Decision.allow()
    return Decision.deny(FailureKind.FORBIDDEN, "Cannot access another user's data")


_RULES = {
    MessageAction.VIEW: can_view,
    MessageAction.MARK_READ: can_mark_read,
}


def decide(identity: Optional[str], message: Message, action: MessageAction) -> Decision:
    """Combine the login check with the rule for `action`."""
    logged_in = is_logged_in(identity)
    if not logged_in:
        return logged_in
    return _RULES[action](identity, message)


# ─── Guard ──────────────────────────────────────────────


class AuthorizationGuard:
    """Token verification plus the rule table, bound to a message store."""

    def __init__(self, tokens: TokenService, messages: MessageStore):
        self.tokens = tokens
        self.messages = messages

    def authenticate_request(self, token: Optional[str]) -> str:
        """Return the claimed username, or raise UnauthenticatedError."""
        if not token:
            raise UnauthenticatedError("Authentication required")
        try:
            return self.tokens.verify(token)
        except TokenError as e:
            raise UnauthenticatedError(str(e))

    @staticmethod
    def ensure_logged_in(identity: Optional[str]) -> None:
        is_logged_in(identity).raise_if_denied()

    @staticmethod
    def ensure_correct_user(
        identity: Optional[str], message: Message, action: MessageAction
    ) -> None:
        decide(identity, message, action).raise_if_denied()

    @staticmethod
    def ensure_same_user(identity: Optional[str], username: str) -> None:
        is_logged_in(identity).raise_if_denied()
        can_access_user(identity, username).raise_if_denied()

    async def load_message(
        self, identity: Optional[str], message_id: int, action: MessageAction
    ) -> Message:
        """Load a message and check `identity` may perform `action` on it.

        Raises UnauthenticatedError before touching the store, then
        NotFoundError, then ForbiddenError.
        """
        self.ensure_logged_in(identity)
        message = await self.messages.get(message_id)
        self.ensure_correct_user(identity, message, action)
        return message
