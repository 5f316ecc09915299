"""Auth boundary models — the contract between calling services and the auth worker.

These types cross the Temporal activity boundary. Callers build the requests;
the auth activities receive them and return an AuthResult.

Design choices:
  - UserRecord is the stored shape and is the only model that carries the
    password hash. It never crosses the boundary; activities return PublicUser.
  - Domain failures are values, not exceptions: AuthResult.error is one of the
    AuthErrorKind tags, with an HTTP-like status so callers can relay it.
  - Emails are exact-match and case-sensitive. No normalisation happens here
    or in the store.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from gatehouse_shared.models import PlatformResult

# ============================================================================
# Domain objects
# ============================================================================


class PublicUser(BaseModel):
    """The public projection of a user — safe to embed in tokens and results."""

    id: str
    email: str
    name: str


class UserRecord(BaseModel):
    """A stored user account. Stored as JSON under its email key."""

    id: str
    email: str
    name: str
    password_hash: str = Field(repr=False)
    created_at: datetime | None = None

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, name=self.name)


class AuthErrorKind(StrEnum):
    """Failure taxonomy reported by the auth activities."""

    DUPLICATE_ACCOUNT = "duplicate_account"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    REGISTRATION_FAILED = "registration_failed"


ERROR_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.DUPLICATE_ACCOUNT: 400,
    AuthErrorKind.INVALID_CREDENTIALS: 400,
    AuthErrorKind.INVALID_TOKEN: 401,
    AuthErrorKind.REGISTRATION_FAILED: 400,
}


# ============================================================================
# Activity Request/Result
# ============================================================================


class RegisterUserRequest(BaseModel):
    email: str = Field(min_length=1)
    name: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class LoginUserRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class AuthResult(PlatformResult):
    """Outcome of register, login, or verify.

    On success `user` and `token` are set and `error` is None. On failure
    `error` names the taxonomy entry and `status` carries its code.
    """

    status: int = 200
    error: AuthErrorKind | None = None
    user: PublicUser | None = None
    token: str | None = None

    @classmethod
    def ok(cls, user: PublicUser, token: str, message: str) -> AuthResult:
        return cls(success=True, message=message, user=user, token=token)

    @classmethod
    def fail(cls, error: AuthErrorKind, message: str) -> AuthResult:
        return cls(
            success=False, message=message, status=ERROR_STATUS[error], error=error
        )
