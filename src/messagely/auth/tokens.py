"""Identity token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The token
carries one claim that matters, the username, signed with a key handed
to TokenService when it is built. There is no session table: a token is
valid exactly when its signature verifies against that key.

Expiry is off unless expire_minutes is given, and there is no revocation
list, so a leaked non-expiring token stays valid until the key rotates.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt


class TokenError(Exception):
    """Raised when a token cannot be verified."""


class TokenService:
    """Issue and verify signed identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: Optional[int] = None,
    ):
        if not secret:
            raise ValueError("TokenService requires a non-empty signing key")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, username: str) -> str:
        """Create a token whose only identity claim is the username."""
        now = datetime.now(timezone.utc)
        payload = {"username": username, "iat": now}
        if self.expire_minutes:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return the claimed username.

        Raises TokenError on a bad signature, a malformed or expired
        token, a missing username claim, or a missing exp claim while
        expiry is on. The username is a claim only: the account may no
        longer exist.
        """
        if not token:
            raise TokenError("Missing token")
        # With expiry on, tokens issued before it was enabled (no exp) are refused
        options = {"require": ["exp"]} if self.expire_minutes else None
        try:
            payload = jwt.decode(
                token, self._secret, algorithms=[self.algorithm], options=options
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}")

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise TokenError("Invalid token: missing username claim")
        return username
