"""Typed failures raised by the core.

Learn: Every failure carries a FailureKind. The HTTP layer maps the kind
to a status code through STATUS_BY_KIND in one place, so route handlers
never translate errors themselves and the core never knows about HTTP.
"""

from enum import Enum
from typing import Any, Optional


class FailureKind(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_FIELD = "invalid_field"
    DUPLICATE_USERNAME = "duplicate_username"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    HASHING_ERROR = "hashing_error"


STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.MISSING_FIELD: 400,
    FailureKind.INVALID_FIELD: 400,
    FailureKind.DUPLICATE_USERNAME: 409,
    FailureKind.INVALID_CREDENTIALS: 401,
    FailureKind.UNAUTHENTICATED: 401,
    FailureKind.FORBIDDEN: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.HASHING_ERROR: 500,
}


class MessagelyError(Exception):
    """Base for all core failures. Subclasses pin `kind`."""

    kind: FailureKind

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the failure to a dictionary for API responses."""
        return {
            "error": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class MissingFieldError(MessagelyError):
    """Required input was absent or empty."""

    kind = FailureKind.MISSING_FIELD

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required information: {', '.join(fields)}",
            details={"fields": fields},
        )
        self.fields = fields


class InvalidFieldError(MessagelyError):
    """Input was present but unusable."""

    kind = FailureKind.INVALID_FIELD

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field


class PasswordTooLongError(InvalidFieldError):
    """bcrypt only reads 72 bytes; longer passwords are refused, not cut."""

    def __init__(self, max_bytes: int):
        super().__init__("password", f"longer than {max_bytes} bytes (UTF-8)")


class DuplicateUsernameError(MessagelyError):
    kind = FailureKind.DUPLICATE_USERNAME

    def __init__(self, username: str):
        super().__init__(
            f"Username already taken: {username}",
            details={"username": username},
        )


class InvalidCredentialsError(MessagelyError):
    """Wrong password or unknown user. The two are never distinguished."""

    kind = FailureKind.INVALID_CREDENTIALS

    def __init__(self):
        super().__init__("Invalid username/password.")


class UnauthenticatedError(MessagelyError):
    kind = FailureKind.UNAUTHENTICATED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(MessagelyError):
    kind = FailureKind.FORBIDDEN

    def __init__(self, message: str = "Not allowed"):
        super().__init__(message)


class NotFoundError(MessagelyError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, resource: str, key: Any):
        super().__init__(
            f"No such {resource}: {key}",
            details={"resource": resource, "key": str(key)},
        )


class HashingError(MessagelyError):
    """The password hashing backend failed. Not retried."""

    kind = FailureKind.HASHING_ERROR

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)

