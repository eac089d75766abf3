"""
FastAPI Application Entry Point

Food Delivery Backend

Endpoints:
    - POST /users, /users/login, /admin/login: accounts and sessions
    - GET /user/fetch, /allusers: profiles
    - POST /cart, /deleteitem; GET /mycart; DELETE /deleteCart: cart
    - POST/GET /orders; PUT/DELETE /orders/{orderId}: orders
    - GET /admin/orders, /api/getTotalShippedOrders: admin views
    - POST/GET /feedback; DELETE /feedback/{id}: feedback
    - POST /clearCookie{name}: logout
    - GET /health: System health check

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_delivery.api import routers
from food_delivery.core.config import Settings, get_settings, setup_logging, get_logger
from food_delivery.core.errors import ServiceError, StoreUnavailable
from food_delivery.database import Database
from food_delivery.schemas import HealthResponse
from food_delivery.services.identity import IdentityService
from food_delivery.services.sessions import SessionService

logger = get_logger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    database = Database(
        settings.database_url,
        echo=settings.database_echo,
        connect_attempts=settings.db_connect_attempts,
        backoff_max=settings.db_connect_backoff_max,
    )
    await database.connect()
    app.state.database = database
    logger.info("✅ Database initialized")

    async with database.session() as db:
        sessions = SessionService(db, ttl_seconds=settings.session_ttl_seconds)
        await sessions.purge_expired()

        if settings.admin_password:
            await IdentityService(db, sessions).seed_admin(
                settings.admin_name, settings.admin_password
            )
        else:
            logger.warning("⚠️ ADMIN_PASSWORD not set, no admin account seeded")

    problems = settings.validate_production_config()
    if problems:
        logger.warning(f"⚠️ Missing production config: {problems}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await database.disconnect()
    logger.info("✅ Cleanup complete")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Flatten FastAPI's error list into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return error_response(422, "validation_error", "; ".join(parts) or "Invalid request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "not_found" if exc.status_code == 404 else "http_error"
    return error_response(exc.status_code, code, str(exc.detail))


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_response(
        StoreUnavailable.status_code, StoreUnavailable.code, StoreUnavailable.default_message
    )


def make_global_exception_handler(settings: Settings):
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        detail = str(exc) if settings.debug else "An unexpected error occurred"
        return error_response(500, "internal_error", detail)

    return global_exception_handler


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())
    """
    settings = settings or get_settings()
    setup_logging(settings=settings)

    app = FastAPI(
        title=settings.app_name,
        description="REST backend for the food delivery client: accounts, carts, orders, feedback.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # Credentialed CORS: origins must be explicit, never "*"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(OperationalError, store_error_handler)
    app.add_exception_handler(InterfaceError, store_error_handler)
    app.add_exception_handler(Exception, make_global_exception_handler(settings))

    # =========================================================================
    # ROOT & HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, Any]:
        """API root with navigation links."""
        return {
            "message": f"🍔 {settings.app_name} started!",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "health": "/health",
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="System Health Check",
    )
    async def health_check(request: Request) -> HealthResponse:
        """Verify the database is reachable."""
        database: Database = request.app.state.database
        healthy = await database.ping()
        return HealthResponse(
            status="operational" if healthy else "degraded",
            database="healthy" if healthy else "unhealthy",
            timestamp=datetime.now(),
        )

    for router in routers:
        app.include_router(router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "food_delivery.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
