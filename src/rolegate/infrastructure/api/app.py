"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rolegate.core.config import Settings, get_settings
from rolegate.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from rolegate.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RoleGateError,
    ServiceError,
    ValidationError,
)
from rolegate.domain.services import AuthorizationEngine, PermissionCatalog, RoleService
from rolegate.infrastructure.api.dependencies import HeaderPrincipalResolver, PrincipalResolver
from rolegate.infrastructure.persistence.database import DatabaseManager

logger = get_logger(__name__)

_ERROR_STATUS: dict[type[RoleGateError], tuple[int, str]] = {
    ValidationError: (status.HTTP_400_BAD_REQUEST, "Validation error"),
    AuthenticationError: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    AuthorizationError: (status.HTTP_403_FORBIDDEN, "Forbidden"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "Not found"),
    ConflictError: (status.HTTP_409_CONFLICT, "Conflict"),
    ServiceError: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service unavailable"),
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    db: DatabaseManager = app.state.db

    # Startup
    configure_logging(settings)
    logger.info(
        "Starting RoleGate",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    # Production schemas are managed by migrations
    if settings.is_development:
        try:
            await db.create_tables()
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    yield

    # Shutdown
    logger.info("Shutting down RoleGate")
    await db.disconnect()


def create_app(
    settings: Settings | None = None,
    db: DatabaseManager | None = None,
    principal_resolver: PrincipalResolver | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Defaults to the cached process settings.
        db: Datastore handle. Built from ``settings`` when omitted.
        principal_resolver: Callable that returns the request's principal.
            Defaults to the trusted gateway header resolver.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    db = db or DatabaseManager(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-based authorization service",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    catalog = PermissionCatalog(db)
    app.state.settings = settings
    app.state.db = db
    app.state.permission_catalog = catalog
    app.state.role_service = RoleService(db, catalog)
    app.state.authorization_engine = AuthorizationEngine(db)
    app.state.principal_resolver = principal_resolver or HeaderPrincipalResolver(
        settings.principal_id_header, settings.principal_role_header
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
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity.
        """
        return {
            "status": "healthy",
            "service": app.state.settings.app_name,
            "version": app.state.settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check endpoint, including database connectivity."""
        db_healthy = await app.state.db.check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": app.state.settings.app_name,
                "version": app.state.settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "service": app.state.settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from rolegate.infrastructure.api.routes import permissions_router, roles_router

    prefix = app.state.settings.api_prefix

    app.include_router(roles_router, prefix=f"{prefix}/roles", tags=["roles"])
    app.include_router(
        permissions_router, prefix=f"{prefix}/permissions", tags=["permissions"]
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers translating domain errors to responses.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(RoleGateError)
    async def rolegate_exception_handler(request: Request, exc: RoleGateError):
        """Map a domain error to its status code."""
        status_code, error = status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        for error_type, mapping in _ERROR_STATUS.items():
            if isinstance(exc, error_type):
                status_code, error = mapping
                break

        content = {"error": error, "detail": exc.message}
        if isinstance(exc, ValidationError):
            content["invalid_names"] = exc.invalid_names
        elif isinstance(exc, ServiceError):
            content["detail"] = ServiceError().message

        if status_code >= 500:
            logger.error(
                "Request failed",
                path=request.url.path,
                method=request.method,
                exc_type=type(exc).__name__,
            )
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "detail": "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in exc.errors()
                ),
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": str(exc) if app.state.settings.debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log each request and bind a correlation ID for its duration."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info("Request started", method=request.method, path=str(request.url.path))

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            # Clear context to prevent leakage
            clear_context()
