"""User storage for Auth.

AuthCore depends on the UserStore protocol, not on Redis. RedisUserStore is the
production implementation on top of RedisAdapter; tests substitute a MockRedis
adapter or a fakeredis-backed one.

Uniqueness: the record is written to its email key with SET NX, so the store is
the final arbiter when two registrations for the same email race past the
find-by-email pre-check. The loser gets DuplicateEmailError.
"""

from __future__ import annotations

import logging
from typing import Protocol

from gatehouse_shared.auth_models import UserRecord
from pydantic import ValidationError

from gatehouse_auth.client import RedisAdapter
from gatehouse_auth.keys import user_email_key, user_id_key, user_idx_all

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The user store could not complete an operation."""


class DuplicateEmailError(StoreError):
    """A record for this email already exists."""


class UserStore(Protocol):
    async def find_by_email(self, email: str) -> UserRecord | None: ...

    async def insert(self, record: UserRecord) -> None: ...


class RedisUserStore:
    """UserStore backed by a RedisAdapter.

    Adapter failures surface as StoreError carrying the backend's message.
    """

    def __init__(self, client: RedisAdapter) -> None:
        self._client = client

    async def find_by_email(self, email: str) -> UserRecord | None:
        try:
            raw = await self._client.get(user_email_key(email))
        except Exception as e:
            raise StoreError(f"User lookup failed: {e}") from e
        if raw is None:
            return None
        try:
            return UserRecord.model_validate_json(raw)
        except ValidationError as e:
            raise StoreError(f"Corrupt user record: {e.error_count()} errors") from e

    async def insert(self, record: UserRecord) -> None:
        """Persist a new record.

        If an index write fails the record is removed again, so a failed insert
        never leaves a loginable account behind.

        Raises:
            DuplicateEmailError: The email key was already taken.
            StoreError: The backend failed; nothing was kept.
        """
        email_key = user_email_key(record.email)
        try:
            created = await self._client.set(email_key, record.model_dump_json(), nx=True)
        except Exception as e:
            raise StoreError(f"User insert failed: {e}") from e
        if not created:
            raise DuplicateEmailError("User already exists")

        # Secondary indexes; the email key above is the source of truth
        id_key = user_id_key(record.id)
        score = record.created_at.timestamp() if record.created_at else 0.0
        try:
            await self._client.set(id_key, record.email)
            await self._client.zadd(user_idx_all(), {record.id: score})
        except Exception as e:
            try:
                await self._client.delete(email_key, id_key)
            except Exception:
                logger.exception("Rollback of user %s failed", record.id)
            raise StoreError(f"User insert failed: {e}") from e

    async def count(self) -> int:
        """Number of registered users."""
        return await self._client.zcard(user_idx_all())
