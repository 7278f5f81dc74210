"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import providers
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.api.v1.router import api_router
from app.core.config import Settings, settings
from app.core.exceptions import setup_exception_handlers
from app.core.logging import setup_logging
from app.core.request_logging import RequestLoggerConfig, RequestLoggerMiddleware
from app.deps.di_container import build_container


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    setup_logging(app.state.settings.LOG_LEVEL)

    yield

    # Shutdown
    await app.state.container.auth_http_client().close()


def create_app(
    app_settings: Optional[Settings] = None,
    request_logger_config: Optional[RequestLoggerConfig] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app from (defaults to the process settings)
        request_logger_config: Replaces the request logger config derived from
            ``ENVIRONMENT`` (custom sink or clock)
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        description="HUMS platform API",
        openapi_url=f"{app_settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # Dependency injection container; the request logger config is resolved
    # once here and shared by the middleware and the health check
    container = build_container(app_settings)
    if request_logger_config is not None:
        container.request_logger_config.override(providers.Object(request_logger_config))
    app.state.container = container
    logger_config = container.request_logger_config()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[f"{app_settings.RATE_LIMIT_PER_MINUTE}/minute"],
        enabled=app_settings.RATE_LIMIT_ENABLED,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Request logging (outermost, so rejected requests are logged too)
    app.add_middleware(RequestLoggerMiddleware, config=logger_config)

    # Include API router
    app.include_router(api_router, prefix=app_settings.API_V1_PREFIX)

    # Add root-level health endpoint for convenience
    from app.api.v1.endpoints.health import get_health

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health(request: Request):
        """Root-level health check endpoint."""
        return await get_health(request)

    # Global exception handlers
    setup_exception_handlers(app)

    return app


app = create_app()
