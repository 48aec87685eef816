"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from storagelink import __version__
from storagelink.api.dependencies import Store
from storagelink.api.schemas import HealthResponse
from storagelink.core.exceptions import StoreError

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its record store.",
)
async def health_check(store: Store) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    if store is None:
        services["store"] = "unknown"
    else:
        try:
            services["store"] = "up" if await store.ping() else "down"
        except StoreError:
            services["store"] = "down"
        if services["store"] == "down":
            overall_status = "unhealthy"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    ready = getattr(request.app.state, "resolution_service", None) is not None
    return {"ready": ready}
