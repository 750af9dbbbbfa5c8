"""
FastAPI application setup: proxy routes to the Uncovering History backend
and page data for the historian front end.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from historymap.config import get_settings
from historymap.core.logging import configure_logging
from historymap.core.error_handlers import setup_error_handlers
from historymap.middleware import RequestContextMiddleware

# Get application settings
settings = get_settings()

configure_logging(
    level=settings.log_level.value,
    json_format=settings.log_json,
    fmt=settings.log_format,
    log_file=settings.log_file,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management with service container.
    Creates the backend client and marker icons at startup, closes the client at shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    from historymap.core.dependencies import service_container
    await service_container.initialize_services()
    app.state.service_container = service_container
    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Shutting down application")
        await app.state.service_container.cleanup_services()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from historymap.api.auth_endpoints import router as auth_router
    from historymap.api.points_endpoints import router as points_router
    from historymap.api.files_endpoints import router as files_router
    from historymap.api.views_endpoints import router as views_router
    app.include_router(auth_router)
    app.include_router(points_router)
    app.include_router(files_router)
    app.include_router(views_router)

    return app


# Create application instance
app = create_app()


@app.get("/")
async def root():
    """Root endpoint for basic health check."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Service status: container state, backend configuration and error counts."""
    from historymap.core.error_handlers import error_handler

    container = getattr(app.state, "service_container", None)
    if container is None or not container.is_initialized:
        status = "unhealthy"
        backend = {"status": "unknown"}
    else:
        client = container.get_backend_client()
        if client.configured:
            status = "healthy"
            backend = {"status": "configured", "url": client.base_url}
        else:
            status = "degraded"
            backend = {"status": "not_configured", "message": "BACKEND_API_URL is not set"}

    return {
        "status": status,
        "version": settings.app_version,
        "environment": settings.environment.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "details": {"backend": backend},
        "error_statistics": error_handler.get_error_statistics(),
    }
