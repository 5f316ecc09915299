"""Session token signing and verification.

TokenSigner wraps PyJWT with the settings it is constructed from. Tokens carry
the caller's claims plus four signer-managed fields:

  sub        the user id
  iat / exp  issue and expiry times (epoch seconds)
  auth_time  when the session started; preserved across refreshes so the
             sliding refresh in AuthCore.verify cannot extend a session forever

`verify` fails closed: every PyJWT error, missing claim, or expired session
surfaces as a single TokenError.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import jwt as pyjwt

from gatehouse_auth.config import AuthSettings

SIGNER_CLAIMS = frozenset({"sub", "iat", "exp", "auth_time"})


class TokenError(Exception):
    """The token is malformed, tampered with, expired, or past its session cap."""


class TokenSigner:
    """Signs and validates session tokens with a fixed secret and algorithm."""

    def __init__(self, settings: AuthSettings) -> None:
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._ttl = settings.token_ttl_seconds
        self._max_session = settings.max_session_seconds

    def sign(self, claims: Mapping[str, Any], auth_time: int | None = None) -> str:
        """Sign `claims` into a fresh token.

        Args:
            claims: Public claims; must include `id`. Signer-managed keys are
                overwritten.
            auth_time: Session start to carry forward on refresh. Defaults to now.
        """
        now = int(time.time())
        payload = {k: v for k, v in claims.items() if k not in SIGNER_CLAIMS}
        payload.update(
            sub=str(claims["id"]),
            iat=now,
            exp=now + self._ttl,
            auth_time=auth_time if auth_time is not None else now,
        )
        return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Validate a token and return its full payload, signer fields included.

        Raises:
            TokenError: Any structural, signature, expiry, or session-cap problem.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub", "auth_time"]},
            )
        except pyjwt.PyJWTError as e:
            raise TokenError("invalid token") from e

        auth_time = payload["auth_time"]
        if not isinstance(auth_time, int) or time.time() - auth_time > self._max_session:
            raise TokenError("session lifetime exceeded")
        return payload

    def verify(self, token: str) -> dict[str, Any]:
        """Validate a token and return only its caller claims."""
        payload = self.decode(token)
        return {k: v for k, v in payload.items() if k not in SIGNER_CLAIMS}
