"""
Artworks API - REST service over a single artwork table.

This package provides:

- The Artwork record and the Insert/Update save commands
- A repository interface with PostgreSQL and in-memory implementations
- FastAPI handlers for list, create, get, update and delete
- Settings, logging and a typer CLI to bootstrap and serve
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from artworks_api.api.app import create_app
from artworks_api.config import Settings, get_settings
from artworks_api.domain.models import Artwork, Insert, SaveAction, Update, save_command
from artworks_api.errors import (
    ArtworksError,
    InvalidAction,
    NotFound,
    QueryError,
    ValidationError,
)
from artworks_api.repositories import (
    AbstractArtworkRepository,
    ArtworkRepository,
    InMemoryArtworkRepository,
    PostgresArtworkRepository,
)
from artworks_api.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Artwork",
    "Insert",
    "SaveAction",
    "Update",
    "save_command",
    # Errors
    "ArtworksError",
    "InvalidAction",
    "NotFound",
    "QueryError",
    "ValidationError",
    # Repositories
    "AbstractArtworkRepository",
    "ArtworkRepository",
    "InMemoryArtworkRepository",
    "PostgresArtworkRepository",
    # HTTP
    "create_app",
    # Logging
    "configure_logging",
    "get_logger",
]
