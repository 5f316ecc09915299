"""Test fixtures for Auth.

Provides a MockRedis adapter that mirrors the RedisAdapter interface, recording
all operations and storing data in plain dicts, plus ready-built settings,
signer, store, and AuthCore wired to it. bcrypt runs at its minimum cost so the
suite stays fast.
"""

from __future__ import annotations

import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from gatehouse_auth.client import RedisAdapter
from gatehouse_auth.config import AuthSettings
from gatehouse_auth.core import AuthCore
from gatehouse_auth.jwt import TokenSigner
from gatehouse_auth.store import RedisUserStore

SECRET = "super-secret-jwt-token-for-testing-only"

# ============================================================================
# MockRedis: mirrors RedisAdapter interface
# ============================================================================


class MockRedis:
    """In-memory Redis mock that mirrors RedisAdapter's async interface.

    Stores data in plain dicts so tests can assert on stored values.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.sorted_sets: dict[str, dict[str, float]] = {}
        self.calls: list[tuple[str, tuple]] = []

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", (key,)))
        return self.store.get(key)

    async def set(self, key: str, value: str, nx: bool = False) -> bool:
        self.calls.append(("set", (key, value)))
        if nx and key in self.store:
            return False
        self.store[key] = value
        return True

    async def delete(self, *keys: str) -> None:
        self.calls.append(("delete", keys))
        for key in keys:
            self.store.pop(key, None)
            self.sorted_sets.pop(key, None)

    async def zadd(self, key: str, mapping: dict[str, float]) -> None:
        self.calls.append(("zadd", (key, mapping)))
        if key not in self.sorted_sets:
            self.sorted_sets[key] = {}
        self.sorted_sets[key].update(mapping)

    async def zcard(self, key: str) -> int:
        return len(self.sorted_sets.get(key, {}))


class FlakyIdIndexAdapter(RedisAdapter):
    """RedisAdapter over fakeredis whose user-id index writes fail while unhealthy."""

    def __init__(self) -> None:
        super().__init__(FakeRedis(server=FakeServer(), decode_responses=True))
        self.healthy = False

    async def set(self, key: str, value: str, nx: bool = False) -> bool:
        if not self.healthy and key.startswith("auth:user:id:"):
            raise ConnectionError("redis timeout")
        return await super().set(key, value, nx=nx)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_redis() -> MockRedis:
    """Provide a fresh MockRedis for each test."""
    return MockRedis()


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(jwt_secret=SECRET, bcrypt_rounds=4)


@pytest.fixture
def signer(settings: AuthSettings) -> TokenSigner:
    return TokenSigner(settings)


@pytest.fixture
def user_store(mock_redis: MockRedis) -> RedisUserStore:
    return RedisUserStore(mock_redis)


@pytest.fixture
def core(user_store: RedisUserStore, signer: TokenSigner) -> AuthCore:
    return AuthCore(user_store, signer, bcrypt_rounds=4)


@pytest.fixture
def flaky_adapter() -> FlakyIdIndexAdapter:
    return FlakyIdIndexAdapter()
