"""Main FastAPI application for the Rules Engine Editor."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ruleseditor_common.config import get_app_settings
from ruleseditor_common.exceptions import register_storage_error_handlers
from ruleseditor_common.logging import setup_logging

from ruleseditor_api import __version__
from ruleseditor_api.api.deps.storage import get_storage_provider_factory
from ruleseditor_api.api.router import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan."""
    # Resolving the factory validates STORAGE_TYPE before serving traffic
    factory = get_storage_provider_factory()
    logger.info(
        f"Application started successfully - default storage: {factory.default_provider_type}"
    )

    try:
        yield
    finally:
        logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_app_settings()
    setup_logging(level=settings.LOG_LEVEL, enable_structured_logging=settings.STRUCTURED_LOGGING)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Storage API for Microsoft RulesEngine workflow documents.",
        version=__version__,
        debug=settings.DEBUG,
        lifespan=app_lifespan,
        openapi_tags=[
            {"name": "rules", "description": "Operations with rule workflows"},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    register_storage_error_handlers(app)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "ruleseditor-api",
            "version": __version__,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/api")
    async def api_index():
        """List the available endpoints."""
        return {
            "name": settings.APP_NAME,
            "version": __version__,
            "endpoints": {
                "workflows": "/api/rules/workflows",
                "workflow": "/api/rules/workflows/{name}",
                "export": "/api/rules/workflows/{name}/export",
                "import": "/api/rules/workflows/import",
                "providers": "/api/rules/providers",
                "health": "/health",
            },
        }

    return app


app = create_app()
