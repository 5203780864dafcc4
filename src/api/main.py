"""Main FastAPI application module for the profiling server.

This module creates and configures the FastAPI application instance with its
middleware, exception handlers, routers and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.logging_middleware import LoggingMiddleware
from src.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from src.core.config import Settings, get_settings
from src.core.events import create_start_app_handler, create_stop_app_handler
from src.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle events.

    Args:
        app: FastAPI application instance
    """
    await create_start_app_handler(app)()
    logger.info("Profiling API started successfully")

    yield

    logger.info("Shutting down Profiling API")
    await create_stop_app_handler(app)()


def create_application(settings: Settings = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to the cached settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Psychometric profiling and interest evaluation API",
        version=settings.APP_VERSION,
        docs_url=f"{settings.API_V1_PREFIX}/docs" if settings.ENABLE_API_DOCS else None,
        redoc_url=f"{settings.API_V1_PREFIX}/redoc" if settings.ENABLE_API_DOCS else None,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json" if settings.ENABLE_API_DOCS else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    register_middleware(app, settings)
    register_routers(app, settings)

    @app.get("/", tags=["Root"], summary="Root endpoint", response_model=Dict[str, str])
    async def root() -> Dict[str, str]:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "health": f"{settings.API_V1_PREFIX}/health",
        }

    if settings.ENABLE_METRICS:
        setup_metrics(app)

    return app


def register_middleware(app: FastAPI, settings: Settings) -> FastAPI:
    """Register application middleware.

    Middleware runs in reverse registration order, so the request ID is set
    before the logging middleware sees the request.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        FastAPI: Application with middleware registered
    """
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "X-Process-Time-Ms"],
    )

    return app


def register_routers(app: FastAPI, settings: Settings) -> FastAPI:
    """Register API routers under the versioned prefix.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        FastAPI: Application with routers registered
    """
    from src.routers import evaluations, health, proctoring, profiles, saved_reports, scores

    api_prefix = settings.API_V1_PREFIX

    app.include_router(health.router, prefix=api_prefix)
    app.include_router(scores.router, prefix=api_prefix)
    app.include_router(evaluations.router, prefix=api_prefix)
    app.include_router(saved_reports.router, prefix=api_prefix)
    app.include_router(proctoring.router, prefix=api_prefix)
    app.include_router(profiles.router, prefix=api_prefix)

    return app


def setup_metrics(app: FastAPI) -> None:
    """Setup Prometheus metrics.

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[".*health.*", "/metrics"],
        inprogress_name="profiling_inprogress",
        inprogress_labels=True,
    )

    instrumentator.instrument(app).expose(
        app,
        endpoint="/metrics",
        tags=["Metrics"],
        include_in_schema=False,
    )

    logger.info("Prometheus metrics enabled at /metrics")


app = create_application()

__all__ = ["app", "create_application"]
