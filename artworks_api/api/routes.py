"""
Artwork endpoints.

Each handler validates only what it needs to call the repository, makes
exactly one repository call and lets the registered error handlers turn
failures into status codes:

    GET    /artworks        200  list
    PUT    /artworks        201  create (created_at set to now)
    GET    /artworks/{id}   200  get
    PUT    /artworks/{id}   204  update (path id must equal body id)
    DELETE /artworks/{id}   204  delete (idempotent)

Handlers are plain functions, so the server runs them on its threadpool
while the repository blocks on the store.
"""

from __future__ import annotations

import time
from typing import List

from fastapi import APIRouter, Depends, Response, status

from artworks_api.api.dependencies import get_repository
from artworks_api.domain.models import Artwork, Insert, Update
from artworks_api.errors import ValidationError
from artworks_api.repositories.abstract import ArtworkRepository
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)
router = APIRouter(prefix="/artworks", tags=["artworks"])


@router.get("", response_model=List[Artwork])
def list_artworks(repository: ArtworkRepository = Depends(get_repository)) -> List[Artwork]:
    return repository.fetch_all()


@router.put("", response_model=Artwork, status_code=status.HTTP_201_CREATED)
def create_artwork(
    artwork: Artwork,
    repository: ArtworkRepository = Depends(get_repository),
) -> Artwork:
    """Store a new artwork. The server owns `created_at`; a client value is overwritten."""
    artwork.created_at = int(time.time())
    created = repository.save(Insert(artwork))
    log.info("Artwork created", extra={"artwork_id": created.id})
    return created


@router.get("/{artwork_id}", response_model=Artwork)
def get_artwork(
    artwork_id: int,
    repository: ArtworkRepository = Depends(get_repository),
) -> Artwork:
    return repository.fetch(artwork_id)


@router.put(
    "/{artwork_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def update_artwork(
    artwork_id: int,
    artwork: Artwork,
    repository: ArtworkRepository = Depends(get_repository),
) -> Response:
    if artwork.id != artwork_id:
        raise ValidationError("Unable to update artwork, URL id mismatch body artwork id")

    repository.save(Update(artwork))
    log.info("Artwork updated", extra={"artwork_id": artwork_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{artwork_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_artwork(
    artwork_id: int,
    repository: ArtworkRepository = Depends(get_repository),
) -> Response:
    repository.remove(artwork_id)
    log.info("Artwork deleted", extra={"artwork_id": artwork_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
