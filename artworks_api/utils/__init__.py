"""
Utilities package for the Artworks API.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from artworks_api.utils.logging import configure_logging, get_logger, logging_config

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_config",
]
