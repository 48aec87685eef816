"""Integration test fixtures for the HTTP API and Redis."""

from __future__ import annotations

import os
from typing import AsyncIterator
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from storagelink.api.app import create_app
from storagelink.core.exceptions import StoreError
from storagelink.registry.store import InMemoryStore, RedisStore
from storagelink.services.resolver import ResolutionService


# ============================================================================
# Redis Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def redis_url() -> str:
    """Get test Redis URL from environment or use default."""
    return os.getenv("TEST_REDIS_URL", "redis://localhost:6380/0")


@pytest.fixture
async def redis_store(redis_url: str) -> AsyncIterator[RedisStore]:
    """
    Create a connected Redis store.

    Skips the test when no Redis server is reachable.
    """
    store = RedisStore(redis_url)
    await store.connect()
    try:
        await store.ping()
    except StoreError:
        await store.close()
        pytest.skip(f"Redis not available at {redis_url}")

    yield store

    await store.flush()
    await store.close()


@pytest.fixture
def store_prefix() -> str:
    """Unique key prefix so tests never see each other's records."""
    return f"test-{uuid4().hex[:8]}"


# ============================================================================
# API Test Client Fixtures
# ============================================================================


@pytest.fixture
def test_app(service: ResolutionService, store: InMemoryStore) -> FastAPI:
    """
    Create a test FastAPI application.

    ASGITransport does not run the lifespan, so the state it would set up
    is attached directly.
    """
    app = create_app()
    app.state.store = store
    app.state.resolution_service = service
    return app


@pytest.fixture
async def test_client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create an async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
