"""Pydantic schemas for messages.

Learn: Message is the stored record. The other shapes are what the API
returns for each operation:
- MessageSummary: what POST /messages returns to the sender
- MessageDetail: one message with both participants expanded
- ReadReceipt: the result of marking a message read
- SentMessage / ReceivedMessage: a user's outbox and inbox entries
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from messagely.schemas.user import PublicUser


class Message(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @property
    def participants(self) -> frozenset[str]:
        return frozenset((self.from_username, self.to_username))


class MessageSummary(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime


class MessageDetail(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: Optional[datetime]
    from_user: PublicUser
    to_user: PublicUser


class ReadReceipt(BaseModel):
    id: int
    read_at: datetime


class SentMessage(BaseModel):
    id: int
    to_user: PublicUser
    body: str
    sent_at: datetime
    read_at: Optional[datetime]


class ReceivedMessage(BaseModel):
    id: int
    from_user: PublicUser
    body: str
    sent_at: datetime
    read_at: Optional[datetime]
