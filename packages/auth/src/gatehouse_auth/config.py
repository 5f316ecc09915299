"""Static settings for the auth worker.

The signing secret and hashing cost are explicit settings passed into
TokenSigner and AuthCore at construction. Only the worker edge calls
`AuthSettings.from_env()`; nothing below it reads the environment.

Environment variables:
  AUTH_JWT_SECRET           required — HMAC signing secret
  AUTH_JWT_ALGORITHM        default HS256
  AUTH_TOKEN_TTL_SECONDS    default 7200 (2 hours)
  AUTH_MAX_SESSION_SECONDS  default 604800 (7 days) — cap on sliding refresh
  AUTH_BCRYPT_ROUNDS        default 10
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_TOKEN_TTL_SECONDS = 2 * 60 * 60
DEFAULT_MAX_SESSION_SECONDS = 7 * 24 * 60 * 60


class AuthSettings(BaseModel):
    """Signing and hashing configuration for one auth worker."""

    jwt_secret: str = Field(min_length=1, repr=False)
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, gt=0)
    max_session_seconds: int = Field(default=DEFAULT_MAX_SESSION_SECONDS, gt=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    @classmethod
    def from_env(cls) -> AuthSettings:
        """Build settings from AUTH_* environment variables.

        Raises:
            ValueError: AUTH_JWT_SECRET is unset, or a numeric value is invalid.
        """
        secret = os.environ.get("AUTH_JWT_SECRET", "")
        if not secret:
            raise ValueError(
                "AUTH_JWT_SECRET environment variable is not set. "
                "Set it to the shared HMAC secret used to sign session tokens."
            )

        return cls(
            jwt_secret=secret,
            jwt_algorithm=os.environ.get("AUTH_JWT_ALGORITHM", "HS256"),
            token_ttl_seconds=int(
                os.environ.get("AUTH_TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)
            ),
            max_session_seconds=int(
                os.environ.get("AUTH_MAX_SESSION_SECONDS", DEFAULT_MAX_SESSION_SECONDS)
            ),
            bcrypt_rounds=int(os.environ.get("AUTH_BCRYPT_ROUNDS", 10)),
        )
