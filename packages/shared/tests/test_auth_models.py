"""Tests for Auth boundary models.

Validates:
  - PlatformResult inheritance chain
  - Error kinds map to their status codes
  - The password hash stays out of public projections and reprs
  - Requests reject empty fields
"""

from datetime import UTC, datetime

import pytest
from gatehouse_shared.auth_models import (
    ERROR_STATUS,
    AuthErrorKind,
    AuthResult,
    LoginUserRequest,
    PublicUser,
    RegisterUserRequest,
    UserRecord,
)
from gatehouse_shared.models import PlatformResult
from pydantic import ValidationError


def _record() -> UserRecord:
    return UserRecord(
        id="user-1",
        email="a@x.com",
        name="A",
        password_hash="$2b$10$abcdefghijklmnopqrstuv",
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


class TestUserRecord:
    def test_to_public_drops_hash(self):
        public = _record().to_public()
        assert public == PublicUser(id="user-1", email="a@x.com", name="A")
        assert "password_hash" not in public.model_dump()

    def test_repr_hides_hash(self):
        assert "$2b$" not in repr(_record())

    def test_json_round_trip(self):
        record = _record()
        assert UserRecord.model_validate_json(record.model_dump_json()) == record


class TestAuthResult:
    def test_extends_platform_result(self):
        assert issubclass(AuthResult, PlatformResult)

    def test_ok(self):
        user = PublicUser(id="user-1", email="a@x.com", name="A")
        result = AuthResult.ok(user, "tok", "Login successful")

        assert result.success is True
        assert result.status == 200
        assert result.error is None
        assert result.user == user

    @pytest.mark.parametrize(
        ("kind", "status"),
        [
            (AuthErrorKind.DUPLICATE_ACCOUNT, 400),
            (AuthErrorKind.INVALID_CREDENTIALS, 400),
            (AuthErrorKind.INVALID_TOKEN, 401),
            (AuthErrorKind.REGISTRATION_FAILED, 400),
        ],
    )
    def test_fail_sets_status(self, kind, status):
        result = AuthResult.fail(kind, "nope")

        assert result.success is False
        assert result.status == status
        assert result.error == kind
        assert result.user is None
        assert result.token is None

    def test_every_kind_has_status(self):
        assert set(ERROR_STATUS) == set(AuthErrorKind)

    def test_error_serializes_as_string(self):
        result = AuthResult.fail(AuthErrorKind.INVALID_TOKEN, "Invalid token")
        assert '"error":"invalid_token"' in result.model_dump_json()


class TestRequests:
    def test_register_requires_fields(self):
        with pytest.raises(ValidationError):
            RegisterUserRequest(email="", name="A", password="secret")
        with pytest.raises(ValidationError):
            RegisterUserRequest(email="a@x.com", name="A", password="")

    def test_login_repr_hides_password(self):
        req = LoginUserRequest(email="a@x.com", password="hunter2")
        assert "hunter2" not in repr(req)
