"""Auth activities — register, login, verify.

Run on AUTH_QUEUE. Each activity delegates to a process-wide AuthCore built
lazily from AuthSettings.from_env() and the shared RedisAdapter. Results are
always returned, never raised, so calling workflows branch on `result.error`
instead of catching activity failures for expected business outcomes.
"""

from __future__ import annotations

from gatehouse_shared.auth_models import (
    AuthErrorKind,
    AuthResult,
    LoginUserRequest,
    RegisterUserRequest,
)
from temporalio import activity

from gatehouse_auth.client import get_client
from gatehouse_auth.config import AuthSettings
from gatehouse_auth.core import (
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    REGISTRATION_FAILED_MESSAGE,
    AuthCore,
)
from gatehouse_auth.jwt import TokenSigner
from gatehouse_auth.store import RedisUserStore

# ============================================================================
# Core singleton
# ============================================================================

_core: AuthCore | None = None


def get_core() -> AuthCore:
    """Return a lazily-initialized AuthCore singleton.

    Raises:
        ValueError: AUTH_JWT_SECRET is not configured.
    """
    global _core
    if _core is not None:
        return _core

    settings = AuthSettings.from_env()
    _core = AuthCore(
        RedisUserStore(get_client()),
        TokenSigner(settings),
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    return _core


def reset_core() -> None:
    """Reset the core singleton — used in tests."""
    global _core
    _core = None


# ============================================================================
# register_user
# ============================================================================


@activity.defn
async def register_user(request: RegisterUserRequest) -> AuthResult:
    """Create an account and return it with a signed token."""
    try:
        result = await get_core().register(request)
    except Exception:
        activity.logger.exception("Auth: register_user failed")
        return AuthResult.fail(
            AuthErrorKind.REGISTRATION_FAILED, REGISTRATION_FAILED_MESSAGE
        )

    if result.success and result.user:
        activity.logger.info(f"Auth: registered user '{result.user.id}'")
    else:
        activity.logger.info(f"Auth: registration rejected ({result.error})")
    return result


# ============================================================================
# login_user
# ============================================================================


@activity.defn
async def login_user(request: LoginUserRequest) -> AuthResult:
    """Check credentials and return the user with a signed token."""
    try:
        result = await get_core().login(request)
    except Exception:
        activity.logger.exception("Auth: login_user failed")
        return AuthResult.fail(
            AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
        )

    if result.success and result.user:
        activity.logger.info(f"Auth: login for user '{result.user.id}'")
    return result


# ============================================================================
# verify_token
# ============================================================================


@activity.defn
async def verify_token(token: str) -> AuthResult:
    """Validate a session token and return its claims with a refreshed token."""
    try:
        return await get_core().verify(token)
    except Exception:
        activity.logger.exception("Auth: verify_token failed")
        return AuthResult.fail(AuthErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
