"""Album Catalog API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError / validation errors to {"message": ...} bodies
    - CORS configured from settings (not hardcoded)
    - The storage capability (DatabaseSessionManager) is built in the lifespan,
      kept on app.state and disposed on shutdown; nothing reaches it globally
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from album_catalog.api.error_handlers import register_error_handlers
from album_catalog.api.routes import albums, health
from album_catalog.config import Settings, get_settings
from album_catalog.infrastructure.database import DatabaseSessionManager
from album_catalog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(
        settings.resolved_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    app.state.db_manager = manager
    logger.info(f"Album Catalog API started ({settings.app_mode.value})")
    yield
    logger.info("Album Catalog API shutting down")
    await manager.dispose()
    app.state.db_manager = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Album Catalog API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(albums.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve on the configured bind address."""
    settings = get_settings()
    logger.info(f"Serving Album Catalog API on {settings.bind_address}")
    uvicorn.run(
        "album_catalog.main:app",
        host=settings.bind_host,
        port=settings.bind_port,
        log_config=None,
    )
