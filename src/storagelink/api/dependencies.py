"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request

from storagelink.config import StorageLinkSettings
from storagelink.registry.store import KeyValueStore
from storagelink.services.resolver import ResolutionService


@lru_cache
def get_settings() -> StorageLinkSettings:
    """Get cached application settings."""
    return StorageLinkSettings()


async def get_store(request: Request) -> KeyValueStore | None:
    """Get record store from app state."""
    return getattr(request.app.state, "store", None)


async def get_resolution_service(request: Request) -> ResolutionService:
    """Get resolution service from app state."""
    return request.app.state.resolution_service


async def get_caller(
    x_caller_address: Annotated[str, Header(description="Address performing the write")],
) -> str:
    """Caller identity, asserted by the fronting layer."""
    return x_caller_address


# Type aliases for cleaner dependency injection
Store = Annotated[KeyValueStore | None, Depends(get_store)]
ResolveService = Annotated[ResolutionService, Depends(get_resolution_service)]
Caller = Annotated[str, Depends(get_caller)]
