from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import psycopg
import pytest

from artworks_api.domain.models import COLUMNS, DESCRIPTIVE_FIELDS, Artwork, Insert, Update
from artworks_api.errors import InvalidAction, NotFound, QueryError
from artworks_api.repositories.abstract import ArtworkRepository
from artworks_api.repositories.postgres import (
    DELETE_SQL,
    FETCH_ALL_SQL,
    FETCH_SQL,
    INSERT_SQL,
    UPDATE_SQL,
    PostgresArtworkRepository,
)

ARTWORK_ID = 7
CREATED_AT = 1489140631
NEW_ID = 42


def _row(artwork_id: int = ARTWORK_ID, **overrides: Any) -> Tuple[Any, ...]:
    values = {name: "" for name in COLUMNS}
    values.update(id=artwork_id, rei="#elle", created_at=CREATED_AT, ubi="Desconocido")
    values.update(overrides)
    return tuple(values[name] for name in COLUMNS)


class _FakeCursor:
    def __init__(self, conn: _FakeConnection) -> None:
        self._conn = conn

    def __enter__(self) -> _FakeCursor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> None:
        self._conn.executed.append((sql, params))
        if self._conn.error is not None:
            raise self._conn.error

    def fetchone(self) -> Optional[Tuple[Any, ...]]:
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self) -> List[Tuple[Any, ...]]:
        return list(self._conn.rows)


class _FakeConnection:
    def __init__(
        self,
        rows: Optional[List[Tuple[Any, ...]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.rows = rows or []
        self.error = error
        self.executed: List[Tuple[str, Optional[Sequence[Any]]]] = []

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self)


class _FakeSource:
    def __init__(self, conn: _FakeConnection) -> None:
        self.conn = conn
        self.acquired = 0

    @contextmanager
    def connection(self) -> Iterator[_FakeConnection]:
        self.acquired += 1
        yield self.conn


def _repository(
    rows: Optional[List[Tuple[Any, ...]]] = None, error: Optional[Exception] = None
) -> Tuple[PostgresArtworkRepository, _FakeSource]:
    source = _FakeSource(_FakeConnection(rows=rows, error=error))
    return PostgresArtworkRepository(source), source


def test_repository_satisfies_protocol() -> None:
    repository, _ = _repository()
    assert isinstance(repository, ArtworkRepository)


def test_fetch_maps_row_to_artwork() -> None:
    repository, source = _repository(rows=[_row(tit="Sample")])

    artwork = repository.fetch(ARTWORK_ID)

    assert artwork.id == ARTWORK_ID
    assert artwork.rei == "#elle"
    assert artwork.created_at == CREATED_AT
    assert artwork.tit == "Sample"
    assert source.conn.executed == [(FETCH_SQL, (ARTWORK_ID,))]


def test_fetch_reads_only_first_row() -> None:
    repository, _ = _repository(rows=[_row(tit="first"), _row(tit="second")])

    assert repository.fetch(ARTWORK_ID).tit == "first"


def test_fetch_missing_row_raises_not_found() -> None:
    repository, _ = _repository(rows=[])

    with pytest.raises(NotFound) as excinfo:
        repository.fetch(999999)

    assert excinfo.value.artwork_id == 999999


def test_fetch_null_text_columns_decode_as_empty() -> None:
    repository, _ = _repository(rows=[_row(est=None, des=None)])

    artwork = repository.fetch(ARTWORK_ID)

    assert artwork.est == ""
    assert artwork.des == ""


def test_fetch_undecodable_row_raises_query_error() -> None:
    repository, _ = _repository(rows=[(ARTWORK_ID, "#elle")])

    with pytest.raises(QueryError) as excinfo:
        repository.fetch(ARTWORK_ID)

    assert excinfo.value.operation == "fetch"
    assert excinfo.value.table == "artworks"


def test_fetch_wrong_column_type_raises_query_error() -> None:
    repository, _ = _repository(rows=[_row(created_at="yesterday")])

    with pytest.raises(QueryError):
        repository.fetch(ARTWORK_ID)


def test_fetch_driver_error_is_wrapped() -> None:
    cause = psycopg.OperationalError("connection reset")
    repository, _ = _repository(error=cause)

    with pytest.raises(QueryError) as excinfo:
        repository.fetch(ARTWORK_ID)

    assert excinfo.value.__cause__ is cause
    assert "connection reset" in str(excinfo.value)
    assert "connection reset" not in excinfo.value.message


def test_fetch_all_returns_every_row() -> None:
    repository, source = _repository(rows=[_row(1), _row(2), _row(3)])

    artworks = repository.fetch_all()

    assert [a.id for a in artworks] == [1, 2, 3]
    assert source.conn.executed == [(FETCH_ALL_SQL, None)]


def test_fetch_all_empty_table_returns_empty_list() -> None:
    repository, _ = _repository(rows=[])

    assert repository.fetch_all() == []


def test_fetch_all_decode_failure_raises_query_error() -> None:
    repository, _ = _repository(rows=[_row(1), (2,)])

    with pytest.raises(QueryError) as excinfo:
        repository.fetch_all()

    assert excinfo.value.operation == "fetch_all"


def test_insert_excludes_id_and_writes_back_returned_id() -> None:
    repository, source = _repository(rows=[(NEW_ID,)])
    artwork = Artwork(id=0, rei="#elle", tit="Sample", created_at=CREATED_AT)

    saved = repository.save(Insert(artwork))

    sql, params = source.conn.executed[0]
    assert sql == INSERT_SQL
    columns = [name.strip() for name in sql.split("(", 1)[1].split(")", 1)[0].split(",")]
    assert columns == list(DESCRIPTIVE_FIELDS) + ["created_at"]
    assert "RETURNING id" in sql
    assert len(params) == len(DESCRIPTIVE_FIELDS) + 1
    assert params[0] == "#elle"
    assert params[DESCRIPTIVE_FIELDS.index("tit")] == "Sample"
    assert params[-1] == CREATED_AT
    assert saved is artwork
    assert artwork.id == NEW_ID


def test_insert_without_returned_id_leaves_zero() -> None:
    repository, _ = _repository(rows=[])
    artwork = Artwork(rei="#elle")

    repository.save(Insert(artwork))

    assert artwork.id == 0


def test_update_sets_descriptive_columns_only() -> None:
    repository, source = _repository()
    artwork = Artwork(id=ARTWORK_ID, rei="#new", est="restored", created_at=1)

    repository.save(Update(artwork))

    sql, params = source.conn.executed[0]
    assert sql == UPDATE_SQL
    set_clause = sql.split(" SET ", 1)[1].split(" WHERE ", 1)[0]
    assigned = [part.split("=", 1)[0].strip() for part in set_clause.split(",")]
    assert assigned == list(DESCRIPTIVE_FIELDS)
    assert sql.endswith("WHERE id = %s")
    assert len(params) == len(DESCRIPTIVE_FIELDS) + 1
    assert params[0] == "#new"
    assert params[-2] == "restored"
    assert params[-1] == ARTWORK_ID


@pytest.mark.parametrize("command", ["INSERT", "MERGE", None, Artwork()])
def test_save_rejects_unknown_commands_before_touching_store(command: Any) -> None:
    repository, source = _repository()

    with pytest.raises(InvalidAction):
        repository.save(command)

    assert source.acquired == 0
    assert source.conn.executed == []


@pytest.mark.parametrize(
    ("command", "operation"),
    [(Insert(Artwork()), "save:insert"), (Update(Artwork(id=1)), "save:update")],
)
def test_save_driver_error_is_wrapped(command: Any, operation: str) -> None:
    repository, _ = _repository(error=psycopg.errors.UndefinedTable("no artworks"))

    with pytest.raises(QueryError) as excinfo:
        repository.save(command)

    assert excinfo.value.operation == operation


def test_remove_is_idempotent() -> None:
    repository, source = _repository()

    repository.remove(1)
    repository.remove(1)

    assert source.conn.executed == [(DELETE_SQL, (1,)), (DELETE_SQL, (1,))]


def test_remove_driver_error_is_wrapped() -> None:
    repository, _ = _repository(error=psycopg.OperationalError("down"))

    with pytest.raises(QueryError) as excinfo:
        repository.remove(1)

    assert excinfo.value.operation == "remove"


def test_ping_reports_store_health() -> None:
    healthy, _ = _repository(rows=[(1,)])
    broken, _ = _repository(error=psycopg.OperationalError("down"))

    assert healthy.ping() is True
    assert broken.ping() is False
