"""Request-scoped accessors for objects the application was built with."""

from __future__ import annotations

from fastapi import Request

from artworks_api.repositories.abstract import ArtworkRepository


def get_repository(request: Request) -> ArtworkRepository:
    return request.app.state.repository


__all__ = ["get_repository"]
