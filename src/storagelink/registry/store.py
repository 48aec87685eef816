"""Key-value stores backing the link and verifier registries."""

from __future__ import annotations

from abc import ABC, abstractmethod

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from storagelink.core.exceptions import StoreError


class KeyValueStore(ABC):
    """
    Async string key-value store.

    ``set`` replaces the whole value for a key atomically, so readers never
    observe a partially written record.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the value for a key."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Replace the value for a key."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key, returning whether it existed."""
        ...

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> "KeyValueStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class InMemoryStore(KeyValueStore):
    """Process-local store for tests and single-process deployments."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._data)


class RedisStore(KeyValueStore):
    """Async Redis-backed store."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._pool: aioredis.ConnectionPool | None = None
        self._redis: aioredis.Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis."""
        self._pool = aioredis.ConnectionPool.from_url(
            self._redis_url,
            max_connections=20,
            decode_responses=True,
        )
        self._redis = aioredis.Redis(connection_pool=self._pool)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis:
            await self._redis.aclose()
        if self._pool:
            await self._pool.disconnect()
        self._redis = None
        self._pool = None

    def _client(self) -> aioredis.Redis:
        if self._redis is None:
            raise StoreError("Redis store is not connected")
        return self._redis

    async def get(self, key: str) -> str | None:
        try:
            return await self._client().get(key)
        except RedisError as e:
            raise StoreError(f"Redis GET failed: {e}", details={"key": key}) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client().set(key, value)
        except RedisError as e:
            raise StoreError(f"Redis SET failed: {e}", details={"key": key}) from e

    async def delete(self, key: str) -> bool:
        try:
            result = await self._client().delete(key)
        except RedisError as e:
            raise StoreError(f"Redis DEL failed: {e}", details={"key": key}) from e
        return result > 0

    async def ping(self) -> bool:
        try:
            return bool(await self._client().ping())
        except RedisError as e:
            raise StoreError(f"Redis PING failed: {e}") from e

    async def flush(self) -> None:
        """Drop every key in the current database."""
        await self._client().flushdb()

    async def __aenter__(self) -> "RedisStore":
        await self.connect()
        return self
