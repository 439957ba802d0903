"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hospeda.core.config import Settings, get_settings
from hospeda.core.context import ServiceContext
from hospeda.core.logging import (
    ServiceLogger,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from hospeda.domain.entities.service_result import ServiceErrorCode
from hospeda.infrastructure.auth import JWTService
from hospeda.infrastructure.persistence.database import DatabaseManager, init_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, opens the database (unless one was attached to
    ``app.state.db`` beforehand) and closes it on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info(
        "Starting Hospeda",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    if getattr(app.state, "db", None) is None:
        app.state.db = DatabaseManager(settings)

    try:
        await init_database(app.state.db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Hospeda")
    await app.state.db.disconnect()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None, db: DatabaseManager | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the cached application settings.
        db: Database manager to use. Created from ``settings`` on startup when
            omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Permission-aware CRUD API for tourism accommodations and destinations",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = db
    app.state.jwt_service = JWTService(settings.secret_key)
    app.state.service_context = ServiceContext(
        logger=ServiceLogger(get_logger("hospeda.services")),
        settings=settings,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity or other dependencies.
        """
        return {
            "status": "healthy",
            "service": "Hospeda",
            "version": request.app.state.settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check(request: Request):
        """Readiness check endpoint.

        Returns 200 if the service is ready to accept requests,
        including database connectivity check.
        """
        db: DatabaseManager | None = request.app.state.db
        if db is not None and await db.check_connection():
            return {
                "status": "ready",
                "service": "Hospeda",
                "version": request.app.state.settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "Hospeda",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check(request: Request):
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": "Hospeda",
            "version": request.app.state.settings.app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from hospeda.infrastructure.api.routes import (
        accommodation_reviews_router,
        accommodations_router,
        destination_reviews_router,
        destinations_router,
        events_router,
        payments_router,
        posts_router,
        promotions_router,
        tags_router,
        users_router,
        webhooks_router,
    )

    prefix = app.state.settings.api_prefix

    app.include_router(accommodations_router, prefix=f"{prefix}/accommodations")
    app.include_router(destinations_router, prefix=f"{prefix}/destinations")
    app.include_router(events_router, prefix=f"{prefix}/events")
    app.include_router(posts_router, prefix=f"{prefix}/posts")
    app.include_router(tags_router, prefix=f"{prefix}/tags")
    app.include_router(accommodation_reviews_router, prefix=f"{prefix}/accommodation-reviews")
    app.include_router(destination_reviews_router, prefix=f"{prefix}/destination-reviews")
    app.include_router(promotions_router, prefix=f"{prefix}/promotions")
    app.include_router(payments_router, prefix=f"{prefix}/payments")
    app.include_router(users_router, prefix=f"{prefix}/users")
    app.include_router(webhooks_router, prefix=f"{prefix}/webhooks")

    @app.get(prefix, tags=["root"])
    async def api_root(request: Request):
        """API root endpoint."""
        settings = request.app.state.settings
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed requests with the service error shape."""
        return JSONResponse(
            status_code=400,
            content={
                "error": {
                    "code": ServiceErrorCode.VALIDATION_ERROR.value,
                    "message": "Invalid request",
                    "details": jsonable_encoder(exc.errors()),
                }
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        debug = request.app.state.settings.debug
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ServiceErrorCode.INTERNAL_ERROR.value,
                    "message": str(exc) if debug else "An unexpected error occurred",
                }
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate its correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
            correlation_id=correlation_id,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
                correlation_id=correlation_id,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
