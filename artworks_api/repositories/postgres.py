"""
PostgreSQL artwork repository.

Maps the four repository operations to parameterized statements against the
`artworks` table and decodes rows into Artwork records. Connections come from
a pool-like source exposing a `connection()` context manager (PoolManager or
a psycopg_pool ConnectionPool); each operation borrows one connection for a
single statement and returns it.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Iterable, List, Protocol, Sequence

import psycopg
from psycopg import Connection

from artworks_api.domain.models import COLUMNS, DESCRIPTIVE_FIELDS, TABLE, Artwork, Insert, SaveCommand, Update
from artworks_api.errors import InvalidAction, NotFound, QueryError
from artworks_api.repositories.abstract import AbstractArtworkRepository
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)

_SELECT_COLUMNS = ", ".join(COLUMNS)

FETCH_SQL = f"SELECT {_SELECT_COLUMNS} FROM {TABLE} WHERE id = %s"
FETCH_ALL_SQL = f"SELECT {_SELECT_COLUMNS} FROM {TABLE}"
INSERT_SQL = (
    f"INSERT INTO {TABLE} ({', '.join(DESCRIPTIVE_FIELDS)}, created_at) "
    f"VALUES ({', '.join(['%s'] * (len(DESCRIPTIVE_FIELDS) + 1))}) "
    "RETURNING id"
)
UPDATE_SQL = (
    f"UPDATE {TABLE} SET {', '.join(f'{name} = %s' for name in DESCRIPTIVE_FIELDS)} "
    "WHERE id = %s"
)
DELETE_SQL = f"DELETE FROM {TABLE} WHERE id = %s"


class ConnectionSource(Protocol):
    def connection(self) -> AbstractContextManager[Connection]: ...


def _decode(operation: str, row: Sequence[Any]) -> Artwork:
    try:
        return Artwork.from_row(row)
    except ValueError as exc:
        raise QueryError(operation, TABLE, exc) from exc


def _decode_all(operation: str, rows: Iterable[Sequence[Any]]) -> List[Artwork]:
    return [_decode(operation, row) for row in rows]


class PostgresArtworkRepository(AbstractArtworkRepository):
    """
    Artwork store backed by a PostgreSQL table.

    Every driver failure is wrapped in QueryError carrying the operation and
    table; the original exception is chained as `__cause__`.
    """

    def __init__(self, source: ConnectionSource) -> None:
        self._source = source

    def fetch(self, artwork_id: int) -> Artwork:
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(FETCH_SQL, (artwork_id,))
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise QueryError("fetch", TABLE, exc) from exc

        if row is None:
            raise NotFound(artwork_id)
        log.debug("Fetched artwork", extra={"artwork_id": artwork_id})
        return _decode("fetch", row)

    def fetch_all(self) -> List[Artwork]:
        """
        Return every row of the table.

        Loads the whole table into memory; callers needing bounded cost must
        page externally.
        """
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(FETCH_ALL_SQL)
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise QueryError("fetch_all", TABLE, exc) from exc

        log.debug("Fetched artworks", extra={"rows": len(rows)})
        return _decode_all("fetch_all", rows)

    def save(self, command: SaveCommand) -> Artwork:
        if isinstance(command, Insert):
            return self._insert(command.artwork)
        if isinstance(command, Update):
            return self._update(command.artwork)
        raise InvalidAction(command)

    def _insert(self, artwork: Artwork) -> Artwork:
        params = artwork.descriptive_values() + (artwork.created_at,)
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(INSERT_SQL, params)
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise QueryError("save:insert", TABLE, exc) from exc

        # The row is stored even if the id cannot be read back; keep id 0.
        if row is None or row[0] is None:
            log.warning("Inserted artwork without a returned id")
            artwork.id = 0
        else:
            artwork.id = int(row[0])
        log.debug("Inserted artwork", extra={"artwork_id": artwork.id})
        return artwork

    def _update(self, artwork: Artwork) -> Artwork:
        params = artwork.descriptive_values() + (artwork.id,)
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(UPDATE_SQL, params)
        except psycopg.Error as exc:
            raise QueryError("save:update", TABLE, exc) from exc

        log.debug("Updated artwork", extra={"artwork_id": artwork.id})
        return artwork

    def remove(self, artwork_id: int) -> None:
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(DELETE_SQL, (artwork_id,))
        except psycopg.Error as exc:
            raise QueryError("remove", TABLE, exc) from exc

        log.debug("Removed artwork", extra={"artwork_id": artwork_id})

    def ping(self) -> bool:
        try:
            with self._source.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
                    cur.fetchone()
        except psycopg.Error:
            log.warning("Store ping failed", exc_info=True)
            return False
        return True


__all__ = [
    "DELETE_SQL",
    "FETCH_ALL_SQL",
    "FETCH_SQL",
    "INSERT_SQL",
    "PostgresArtworkRepository",
    "UPDATE_SQL",
]
