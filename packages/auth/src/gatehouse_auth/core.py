"""AuthCore — register, login, and verify.

Business rules only. Storage goes through the UserStore protocol and tokens
through TokenSigner, both injected. Every operation returns an AuthResult;
domain failures are AuthErrorKind values and internal exceptions are translated
before they leave this module.

Nothing here logs raw emails, passwords, hashes, or tokens — only user IDs.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import UTC, datetime

from gatehouse_shared.auth_models import (
    AuthErrorKind,
    AuthResult,
    LoginUserRequest,
    PublicUser,
    RegisterUserRequest,
    UserRecord,
)

from gatehouse_auth.jwt import SIGNER_CLAIMS, TokenError, TokenSigner
from gatehouse_auth.passwords import hash_password, verify_password
from gatehouse_auth.store import DuplicateEmailError, StoreError, UserStore

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "User already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INVALID_TOKEN_MESSAGE = "Invalid token"
REGISTRATION_FAILED_MESSAGE = "Registration failed"


class AuthCore:
    """Credential issuance over a UserStore and a TokenSigner."""

    def __init__(
        self, store: UserStore, signer: TokenSigner, bcrypt_rounds: int = 10
    ) -> None:
        self._store = store
        self._signer = signer
        self._bcrypt_rounds = bcrypt_rounds
        # Compared against when the email is unknown, so both login failure
        # paths pay for one bcrypt check.
        self._dummy_hash = hash_password(uuid.uuid4().hex, bcrypt_rounds)

    # ========================================================================
    # register
    # ========================================================================

    async def register(self, request: RegisterUserRequest) -> AuthResult:
        """Create an account and issue its first token."""
        try:
            if await self._store.find_by_email(request.email) is not None:
                return AuthResult.fail(AuthErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_MESSAGE)

            password_hash = await asyncio.to_thread(
                hash_password, request.password, self._bcrypt_rounds
            )
            record = UserRecord(
                id=str(uuid.uuid4()),
                email=request.email,
                name=request.name,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            await self._store.insert(record)

            user = record.to_public()
            token = self._signer.sign(user.model_dump())
        except DuplicateEmailError:
            # Lost a race with a concurrent registration for the same email
            return AuthResult.fail(AuthErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_MESSAGE)
        except StoreError as e:
            logger.exception("Registration failed in the user store")
            return AuthResult.fail(AuthErrorKind.REGISTRATION_FAILED, str(e))
        except Exception:
            logger.exception("Registration failed")
            return AuthResult.fail(
                AuthErrorKind.REGISTRATION_FAILED, REGISTRATION_FAILED_MESSAGE
            )

        logger.info("Registered user %s", user.id)
        return AuthResult.ok(user, token, "User registered")

    # ========================================================================
    # login
    # ========================================================================

    async def login(self, request: LoginUserRequest) -> AuthResult:
        """Check a password and issue a token.

        Unknown email and wrong password produce the same result.
        """
        try:
            record = await self._store.find_by_email(request.email)
            password_hash = record.password_hash if record else self._dummy_hash
            matches = await asyncio.to_thread(
                verify_password, request.password, password_hash
            )
            if record is None or not matches:
                return AuthResult.fail(
                    AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
                )

            user = record.to_public()
            token = self._signer.sign(user.model_dump())
        except Exception:
            logger.exception("Login failed")
            return AuthResult.fail(
                AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        logger.info("Logged in user %s", user.id)
        return AuthResult.ok(user, token, "Login successful")

    # ========================================================================
    # verify
    # ========================================================================

    async def verify(self, token: str) -> AuthResult:
        """Validate a token and re-issue it with a fresh expiry.

        The refreshed token keeps the original auth_time, so refreshing can
        never outlive the configured maximum session.
        """
        try:
            payload = self._signer.decode(token)
            claims = {k: v for k, v in payload.items() if k not in SIGNER_CLAIMS}
            user = PublicUser.model_validate(claims)
            refreshed = self._signer.sign(claims, auth_time=payload["auth_time"])
        except TokenError as e:
            logger.info("Rejected token: %s", e)
            return AuthResult.fail(AuthErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
        except Exception:
            logger.exception("Token verification failed")
            return AuthResult.fail(AuthErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)

        return AuthResult.ok(user, refreshed, "Token valid")
