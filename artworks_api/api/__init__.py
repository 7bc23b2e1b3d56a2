"""
HTTP layer for the Artworks API.

Routes, error mapping and the application factory. Handlers reach the store
only through the ArtworkRepository the application was built with.
"""

from artworks_api.api.app import create_app

__all__ = ["create_app"]
