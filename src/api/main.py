"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.api.dependencies import build_registry
from src.api.v1 import router as v1_router
from src.api.v1.routes import operation_failed_handler
from src.config.settings import get_settings
from src.domain.exceptions import OperationFailed

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Identity Registry API v1 - Register and manage pseudonymous identities",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Applies the configured log level
    - Builds the registry service with policy defaults from settings
    """
    settings = get_settings()
    logging.getLogger("src").setLevel(settings.log_level.upper())

    logger.info("Starting application...")
    app.state.registry = build_registry(settings)
    logger.info(
        "Registry ready: max_identities=%d creation_fee=%d",
        settings.max_identities,
        settings.creation_fee,
    )

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="pseudonym-registry",
    description="Identity Registry API - Binds unique pseudonyms to public keys under a single authority",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")
app.add_exception_handler(OperationFailed, operation_failed_handler)


@app.get("/health")
async def health_check(request: Request) -> dict[str, str | int]:
    """
    Health check endpoint with registry validation.

    Returns 200 OK with the number of registered identities.
    """
    registry = request.app.state.registry
    return {"status": "healthy", "identities": registry.get_identity_count()}
