"""Integration tests for the Redis-backed registries."""

from __future__ import annotations

import asyncio

import pytest

from storagelink.core.models import Link
from storagelink.registry.keys import StoreKeys
from storagelink.registry.links import LinkRegistry
from storagelink.registry.store import RedisStore
from storagelink.registry.verifiers import VerifierRegistry

pytestmark = [pytest.mark.integration, pytest.mark.requires_redis]

NODE = b"\x42" * 32
TARGET = "0x6666666666666666666666666666666666666666"
VERIFIER = "0x7777777777777777777777777777777777777777"


# ============================================================================
# Store Tests
# ============================================================================


class TestRedisStore:
    """Tests for RedisStore against a live server."""

    async def test_set_get_delete(self, redis_store: RedisStore, store_prefix: str):
        """Basic operations should round-trip through Redis."""
        key = f"{store_prefix}:k"

        await redis_store.set(key, "value")
        assert await redis_store.get(key) == "value"

        assert await redis_store.delete(key) is True
        assert await redis_store.get(key) is None

    async def test_ping(self, redis_store: RedisStore):
        """A connected store should answer ping."""
        assert await redis_store.ping() is True


# ============================================================================
# Registry Tests
# ============================================================================


class TestRedisRegistries:
    """Tests for the registries over Redis."""

    async def test_link_roundtrip(self, redis_store: RedisStore, store_prefix: str):
        """Links should read back unchanged from Redis."""
        links = LinkRegistry(redis_store, StoreKeys(store_prefix))
        link = Link(chain_id=8453, target=TARGET, gateways=("https://g.test",))

        await links.put(NODE, link)

        assert await links.get(NODE) == link

    async def test_concurrent_replace_is_whole_record(
        self, redis_store: RedisStore, store_prefix: str
    ):
        """Concurrent replacements should leave one complete record."""
        links = LinkRegistry(redis_store, StoreKeys(store_prefix))
        candidates = [
            Link(chain_id=1, target=TARGET, verifier=VERIFIER),
            Link(chain_id=10, target=TARGET),
        ]

        await asyncio.gather(*(links.put(NODE, link) for link in candidates))

        assert await links.get(NODE) in candidates

    async def test_verifier_clear(self, redis_store: RedisStore, store_prefix: str):
        """Clearing a verifier should delete its key."""
        verifiers = VerifierRegistry(redis_store, StoreKeys(store_prefix))

        await verifiers.put(8453, VERIFIER)
        assert await verifiers.get(8453) == VERIFIER

        await verifiers.put(8453, None)
        assert await verifiers.get(8453) is None
