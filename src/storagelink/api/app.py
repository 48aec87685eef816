"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storagelink import __version__
from storagelink.api.dependencies import get_settings
from storagelink.api.routes import health_router, links_router, resolve_router
from storagelink.api.schemas import APIError, ErrorDetail
from storagelink.core.exceptions import (
    NotFoundError,
    ProofFetchError,
    StorageLinkError,
    StoreError,
    UnauthorizedError,
    UnreachableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_ERROR_STATUS: list[tuple[type[StorageLinkError], int, str]] = [
    (ValidationError, 400, "invalid_request"),
    (UnauthorizedError, 403, "unauthorized"),
    (UnreachableError, 404, "unreachable"),
    (NotFoundError, 404, "not_found"),
    (ProofFetchError, 502, "gateway_error"),
    (StoreError, 503, "store_unavailable"),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of resources.
    """
    from storagelink.client import create_oracle, create_store
    from storagelink.registry.keys import StoreKeys
    from storagelink.registry.links import LinkRegistry
    from storagelink.registry.verifiers import VerifierRegistry
    from storagelink.resolution.gateway import GatewayProofFetcher
    from storagelink.services.resolver import ResolutionService

    settings = get_settings()
    logging.basicConfig(level="DEBUG" if settings.debug else settings.log_level.upper())

    logger.info("Initializing record store...")
    app.state.store = await create_store(settings)

    logger.info("Initializing proof gateway fetcher...")
    app.state.fetcher = GatewayProofFetcher(
        settings.gateway_urls,
        timeout=settings.gateway_timeout,
    )

    keys = StoreKeys(settings.store_prefix)
    app.state.resolution_service = ResolutionService(
        create_oracle(settings),
        LinkRegistry(app.state.store, keys),
        VerifierRegistry(app.state.store, keys),
        app.state.fetcher,
        resolver_address=settings.resolver_address,
        owner_address=settings.owner_address,
    )

    logger.info("Application startup complete")

    yield

    # Cleanup
    logger.info("Shutting down application...")

    if hasattr(app.state, "fetcher"):
        await app.state.fetcher.close()

    if hasattr(app.state, "store"):
        await app.state.store.close()

    logger.info("Application shutdown complete")


async def handle_storagelink_error(request: Request, exc: StorageLinkError) -> JSONResponse:
    """Render a domain error as an API error response."""
    status_code, code = 500, "internal_error"
    for error_type, error_status, error_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code, code = error_status, error_code
            break

    if status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")

    body = APIError(
        error=ErrorDetail(code=code, message=exc.message, details=exc.details or None)
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def create_app(
    *,
    title: str = "Storagelink API",
    description: str = "Resolve names to records held behind a storage-proof gateway",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageLinkError, handle_storagelink_error)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(resolve_router, prefix="/api/v1")
    app.include_router(links_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
