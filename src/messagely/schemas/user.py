"""Pydantic schemas for credentials and users.

Learn: Credential is the stored record, including the password hash.
The hash is excluded from serialization and repr, so dumping a
Credential (or logging one) can never leak it. Everything that leaves
the core as a "user" is a PublicUser or a UserDetail.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    first_name: str
    last_name: str
    phone: str


class Credential(BaseModel):
    """A registered user as the credential store holds it."""

    username: str
    password_hash: str = Field(exclude=True, repr=False)
    first_name: str
    last_name: str
    phone: str
    join_at: datetime
    last_login_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    def public(self) -> "PublicUser":
        return PublicUser(
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
        )

    def detail(self) -> "UserDetail":
        return UserDetail(
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            join_at=self.join_at,
            last_login_at=self.last_login_at,
        )


class PublicUser(BaseModel):
    username: str
    first_name: str
    last_name: str
    phone: str

    model_config = {"from_attributes": True}


class UserDetail(PublicUser):
    join_at: datetime
    last_login_at: Optional[datetime] = None
