"""
FastAPI application factory for the Artworks API.

`create_app` wires a repository into the artwork and health routes. Without
an explicit repository it builds the PostgreSQL one on a pool owned by the
application: opened at startup, closed at shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artworks_api import __version__
from artworks_api.api import health, routes
from artworks_api.api.error_handlers import register_error_handlers
from artworks_api.config import Settings, get_settings
from artworks_api.infrastructure.db_factory import PoolManager
from artworks_api.repositories.abstract import ArtworkRepository
from artworks_api.repositories.postgres import PostgresArtworkRepository
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ArtworkRepository] = None,
) -> FastAPI:
    """
    Build the application.

    Parameters
    ----------
    settings : Settings, optional
        Configuration value; defaults to the process settings.
    repository : ArtworkRepository, optional
        Store the handlers use. Defaults to PostgreSQL via a pooled connection.
    """
    settings = settings or get_settings()
    pool_manager: Optional[PoolManager] = None
    if repository is None:
        pool_manager = PoolManager(settings)
        repository = PostgresArtworkRepository(pool_manager)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if pool_manager is not None:
            pool_manager.get_pool()
        log.info("Artworks API started", extra={"env": settings.app_env})
        try:
            yield
        finally:
            if pool_manager is not None:
                pool_manager.close()
            log.info("Artworks API shutting down")

    app = FastAPI(title="Artworks API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(routes.router)
    register_error_handlers(app)
    return app


__all__ = ["create_app"]
