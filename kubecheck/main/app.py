"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from kubecheck.main.config import AppSettings, get_settings
from kubecheck.main.container import app_lifespan, init_container
from kubecheck.presentation.controllers import checks_router
from kubecheck.presentation.middleware import RequestLoggingMiddleware
from kubecheck.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Uses the container's app_lifespan so the shared clients are created on
    startup and released on shutdown.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the ones read from the environment

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = settings or get_settings()

    # Update logging with complete settings
    update_logging_from_settings(settings)

    # Initialize dependency injection container
    init_container(settings)

    app = FastAPI(
        title=settings.server.title,
        description=settings.server.description,
        version=settings.server.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(checks_router)

    return app
