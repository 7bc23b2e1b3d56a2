"""
In-memory artwork repository.

Behaves like the PostgreSQL repository (sequential ids, idempotent removes,
NotFound on missing rows) without a database. Used by the test suite and by
`serve --in-memory` for local development.
"""

from __future__ import annotations

import itertools
import threading
from typing import Dict, Iterable, List, Optional

from artworks_api.domain.models import Artwork, Insert, SaveCommand, Update
from artworks_api.errors import InvalidAction, NotFound
from artworks_api.repositories.abstract import AbstractArtworkRepository


class InMemoryArtworkRepository(AbstractArtworkRepository):
    """
    Dict-backed store guarded by a lock.

    Stored rows are copies, so callers mutating a returned artwork do not
    change what is stored.
    """

    def __init__(self, artworks: Optional[Iterable[Artwork]] = None) -> None:
        self._lock = threading.Lock()
        self._rows: Dict[int, Artwork] = {}
        for artwork in artworks or ():
            self._rows[artwork.id] = artwork.model_copy()
        self._ids = itertools.count(max(self._rows, default=0) + 1)

    def fetch(self, artwork_id: int) -> Artwork:
        with self._lock:
            row = self._rows.get(artwork_id)
            if row is None:
                raise NotFound(artwork_id)
            return row.model_copy()

    def fetch_all(self) -> List[Artwork]:
        with self._lock:
            return [row.model_copy() for row in self._rows.values()]

    def save(self, command: SaveCommand) -> Artwork:
        if not isinstance(command, (Insert, Update)):
            raise InvalidAction(command)

        artwork = command.artwork
        with self._lock:
            if isinstance(command, Insert):
                artwork.id = next(self._ids)
                self._rows[artwork.id] = artwork.model_copy()
                return artwork

            stored = self._rows.get(artwork.id)
            # UPDATE on a missing row matches nothing, as in SQL.
            if stored is not None:
                self._rows[artwork.id] = artwork.model_copy(
                    update={"created_at": stored.created_at}
                )
            return artwork

    def remove(self, artwork_id: int) -> None:
        with self._lock:
            self._rows.pop(artwork_id, None)


__all__ = ["InMemoryArtworkRepository"]
