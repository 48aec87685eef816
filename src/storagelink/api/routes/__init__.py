"""API route modules."""

from storagelink.api.routes.health import router as health_router
from storagelink.api.routes.links import router as links_router
from storagelink.api.routes.resolve import router as resolve_router

__all__ = [
    "health_router",
    "links_router",
    "resolve_router",
]
