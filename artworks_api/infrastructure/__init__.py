"""
Infrastructure package for the Artworks API.

Centralizes database connectivity concerns (pooling, dedicated connections,
table bootstrap). Keep this layer focused on I/O and resource management,
decoupled from repository and HTTP logic.
"""

from artworks_api.infrastructure.db_factory import (
    PoolManager,
    connection_kwargs,
    get_sync_connection,
)
from artworks_api.infrastructure.schema import artworks_ddl, init_schema

__all__ = [
    "PoolManager",
    "artworks_ddl",
    "connection_kwargs",
    "get_sync_connection",
    "init_schema",
]
