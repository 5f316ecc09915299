"""Redis client adapter for Auth.

Normalizes the interface between the Upstash SDK (cloud) and fakeredis (local
dev). Both support get/set/zadd, but differ in argument shapes for sorted sets.
The RedisAdapter wraps this difference so the user store never touches raw
clients.

Environment detection:
  - UPSTASH_REDIS_REST_URL set → Upstash SDK (staging/prod)
  - Otherwise → fakeredis (local dev, no Docker, no cloud dependency)

Usage:
    from gatehouse_auth.client import get_client

    client = get_client()
    created = await client.set("auth:user:email:a@x.com", json_str, nx=True)
"""

from __future__ import annotations

import os
from typing import Any


class RedisAdapter:
    """Unified async Redis interface over Upstash SDK or fakeredis."""

    def __init__(self, raw_client: Any, is_upstash: bool = False) -> None:
        self._client = raw_client
        self._is_upstash = is_upstash

    async def get(self, key: str) -> str | None:
        result = await self._client.get(key)
        if isinstance(result, bytes):
            return result.decode()
        return result

    async def set(self, key: str, value: str, nx: bool = False) -> bool:
        """Set a key. With `nx`, only if absent — returns False when it existed."""
        result = await self._client.set(key, value, nx=nx)
        return bool(result)

    async def delete(self, *keys: str) -> None:
        await self._client.delete(*keys)

    async def zadd(self, key: str, mapping: dict[str, float]) -> None:
        if self._is_upstash:
            for member, score in mapping.items():
                await self._client.zadd(key, {"member": member, "score": score})
        else:
            await self._client.zadd(key, mapping)

    async def zcard(self, key: str) -> int:
        return await self._client.zcard(key) or 0


# ============================================================================
# Singleton management
# ============================================================================

_client: RedisAdapter | None = None


def get_client() -> RedisAdapter:
    """Return a lazily-initialized RedisAdapter singleton.

    Environment detection:
      - UPSTASH_REDIS_REST_URL set → Upstash SDK
      - Otherwise → fakeredis (in-memory, no external dependency)
    """
    global _client
    if _client is not None:
        return _client

    if os.environ.get("UPSTASH_REDIS_REST_URL"):
        from upstash_redis.asyncio import Redis

        raw = Redis.from_env()
        _client = RedisAdapter(raw, is_upstash=True)
    else:
        from fakeredis.aioredis import FakeRedis

        raw = FakeRedis(decode_responses=True)
        _client = RedisAdapter(raw, is_upstash=False)

    return _client


def reset_client() -> None:
    """Reset the client singleton — used in tests to inject mocks."""
    global _client
    _client = None


def set_client(adapter: RedisAdapter) -> None:
    """Inject a client — used in tests."""
    global _client
    _client = adapter
