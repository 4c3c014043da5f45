"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.context import AppContext
from backend.api.error_handling import register_error_handlers
from backend.boundary.db.connection import create_all_tables
from backend.configs import Settings, get_settings
from backend.observability.logger import configure_logging
from backend.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    auth_router,
    comments_router,
    documents_router,
    health_router,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    context: AppContext | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings to build the context from (environment if None)
        context: Prebuilt context (tests); built on startup if None

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = context.settings if context else (settings or get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Configures logging and builds the application context on startup,
        and releases its pooled connections on shutdown. A context supplied
        by the caller is used as-is and left for the caller to dispose.
        """
        configure_logging(settings.observability.log_level)
        owns_context = context is None
        app_context = context or AppContext.from_settings(settings)
        app.state.context = app_context

        if settings.database.create_tables_on_startup:
            logger.info("Creating database tables")
            await create_all_tables(app_context.engine)

        logger.info("Application started", extra={"environment": settings.environment})
        yield

        if owns_context:
            await app_context.dispose()
        logger.info("Application stopped")

    app = FastAPI(
        title="PDF Share API",
        description="Upload, share and comment on PDF documents",
        version="0.1.0",
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.observability.get_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_error_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Run the API under uvicorn with settings from the environment."""
    uvicorn.run(
        "backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
