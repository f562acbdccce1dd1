"""Token service tests."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from messagely.auth.tokens import TokenError, TokenService


def test_issue_and_verify(token_service):
    token = token_service.issue("alice")
    assert token_service.verify(token) == "alice"


def test_tokens_have_no_expiry_by_default(token_service):
    payload = jwt.decode(token_service.issue("alice"), options={"verify_signature": False})
    assert payload["username"] == "alice"
    assert "iat" in payload
    assert "exp" not in payload


def test_optional_expiry_claim():
    svc = TokenService(secret="k" * 32, expire_minutes=5)
    payload = jwt.decode(svc.issue("alice"), options={"verify_signature": False})
    assert "exp" in payload
    assert svc.verify(svc.issue("alice")) == "alice"


def test_expired_token_rejected():
    secret = "k" * 32
    svc = TokenService(secret=secret, expire_minutes=5)
    past = datetime.now(timezone.utc) - timedelta(minutes=10)
    token = jwt.encode({"username": "alice", "iat": past, "exp": past}, secret, algorithm="HS256")
    with pytest.raises(TokenError, match="expired"):
        svc.verify(token)


def test_other_key_rejected(token_service):
    other = TokenService(secret="a-completely-different-key-0123456789")
    with pytest.raises(TokenError):
        token_service.verify(other.issue("alice"))


def test_tampered_token_rejected(token_service):
    header, payload, signature = token_service.issue("alice").split(".")
    forged = jwt.encode({"username": "mallory"}, "guessed-signing-key-" * 2, algorithm="HS256").split(".")[1]
    with pytest.raises(TokenError):
        token_service.verify(f"{header}.{forged}.{signature}")


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_rejected(token_service, token):
    with pytest.raises(TokenError):
        token_service.verify(token)


def test_missing_username_claim_rejected():
    secret = "k" * 32
    svc = TokenService(secret=secret)
    token = jwt.encode({"sub": "alice"}, secret, algorithm="HS256")
    with pytest.raises(TokenError, match="username"):
        svc.verify(token)


def test_empty_signing_key_refused():
    with pytest.raises(ValueError):
        TokenService(secret="")


def test_expiry_on_rejects_tokens_without_exp():
    """Tokens issued before expiry was enabled stop verifying once it is."""
    secret = "k" * 32
    legacy = TokenService(secret=secret).issue("alice")
    with pytest.raises(TokenError, match="exp"):
        TokenService(secret=secret, expire_minutes=5).verify(legacy)
