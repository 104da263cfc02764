"""
Timeless watch rental API - FastAPI application
"""
from contextlib import asynccontextmanager
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from starlette_context import plugins
from starlette_context.middleware import ContextMiddleware

from timeless.api.v1 import api_router
from timeless.core.config import settings
from timeless.core.database import db_manager
from timeless.core.exceptions import (
    BaseAPIException,
    handle_api_exception,
    handle_request_validation,
    handle_unexpected_exception,
)
from timeless.core.logging import log, setup_logging
from timeless.middleware import RequestContextMiddleware, SecurityHeadersMiddleware, TimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events
    """
    setup_logging()
    log.info("Starting Timeless API", version=settings.version, env=settings.environment)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        log.info("Sentry initialized")

    yield

    log.info("Shutting down Timeless API")
    await db_manager.close()


def create_application() -> FastAPI:
    """
    Create FastAPI application with all configurations
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "brands", "description": "Watch brands"},
            {"name": "watches", "description": "Rentable watches"},
        ],
    )

    # Add custom exception handlers
    app.add_exception_handler(BaseAPIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    # Add middleware stack (last added runs first)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        ContextMiddleware,
        plugins=(
            plugins.RequestIdPlugin(),
            plugins.CorrelationIdPlugin(force_new_uuid=False),
        ),
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    # Add API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/", tags=["root"])
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information"""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if settings.debug else None,
        }

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "timeless.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
        server_header=False,
    )
