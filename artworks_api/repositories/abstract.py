"""
Abstract repository interfaces for the Artworks API.

Concrete repositories (PostgreSQL, in-memory) implement the ArtworkRepository
protocol so the HTTP handlers can be composed with either of them.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, runtime_checkable

from artworks_api.domain.models import Artwork, SaveCommand


@runtime_checkable
class ArtworkRepository(Protocol):
    """
    Common interface every artwork store must implement.

    Every call round-trips to the store; implementations keep no records
    between calls.
    """

    def fetch(self, artwork_id: int) -> Artwork:
        """
        Return the artwork stored under `artwork_id`.

        Raises
        ------
        NotFound
            If no row matches.
        QueryError
            If the statement fails or the row cannot be decoded.
        """
        ...

    def fetch_all(self) -> List[Artwork]:
        """Return every stored artwork, in the store's natural order."""
        ...

    def save(self, command: SaveCommand) -> Artwork:
        """
        Insert or update an artwork.

        An Insert writes the store-assigned id back into `command.artwork`.

        Raises
        ------
        InvalidAction
            If `command` is neither Insert nor Update. Raised before the
            store is touched.
        QueryError
            If the statement fails.
        """
        ...

    def remove(self, artwork_id: int) -> None:
        """Delete the artwork; removing a missing id is not an error."""
        ...

    def ping(self) -> bool:
        """Return True when the store answers a trivial query."""
        ...


class AbstractArtworkRepository(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    def fetch(self, artwork_id: int) -> Artwork:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_all(self) -> List[Artwork]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def save(self, command: SaveCommand) -> Artwork:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def remove(self, artwork_id: int) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def ping(self) -> bool:
        return True


__all__ = [
    "AbstractArtworkRepository",
    "ArtworkRepository",
]
