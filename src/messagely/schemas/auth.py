"""Request/response bodies for the auth and message routes.

Learn: Fields are Optional on purpose. A missing field must reach the
service, which reports it as MISSING_FIELD (400) naming every absent
field, instead of FastAPI's generic 422. The password is accepted as
either "password" or "secret".
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


def _password_field():
    return Field(None, validation_alias=AliasChoices("password", "secret"))


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = _password_field()
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = _password_field()


class TokenResponse(BaseModel):
    token: str


class SendMessageRequest(BaseModel):
    to_username: Optional[str] = None
    body: Optional[str] = None
