"""
Repositories package for the Artworks API.

Re-exports the repository interfaces and the concrete stores so downstream
code can import from `artworks_api.repositories` directly.
"""

from artworks_api.repositories.abstract import (
    AbstractArtworkRepository,
    ArtworkRepository,
)
from artworks_api.repositories.memory import InMemoryArtworkRepository
from artworks_api.repositories.postgres import PostgresArtworkRepository

__all__ = [
    # Abstracts
    "AbstractArtworkRepository",
    "ArtworkRepository",
    # Concrete stores
    "InMemoryArtworkRepository",
    "PostgresArtworkRepository",
]
