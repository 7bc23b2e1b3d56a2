"""
Database connection factory utilities for the Artworks API.

Provides management of the synchronous PostgreSQL connection pool shared by
the request handlers, plus a dedicated-connection helper for one-off work
(schema bootstrap, seeding). Both are driven by an explicit Settings value.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from artworks_api.config import Settings
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)


def connection_kwargs(settings: Settings) -> Dict[str, Any]:
    """
    Extra libpq parameters applied to every connection.

    A positive `db_statement_timeout_ms` is passed as a server option so the
    timeout holds for the whole session without an extra round-trip.
    """
    kwargs: Dict[str, Any] = {}
    if settings.db_statement_timeout_ms > 0:
        kwargs["options"] = f"-c statement_timeout={settings.db_statement_timeout_ms}"
    return kwargs


class PoolManager:
    """
    Owner of the connection pool used by the repository.

    The pool is created lazily on first use and is safe to share between the
    threads the ASGI server runs handlers on.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._lock = threading.Lock()
        self._pool: Optional[ConnectionPool] = None

    def get_pool(self) -> ConnectionPool:
        """
        Get or create the synchronous connection pool.

        Returns
        -------
        ConnectionPool
            The managed pool instance, already opened.
        """
        with self._lock:
            if self._pool is None:
                settings = self._settings
                pool = ConnectionPool(
                    conninfo=settings.datasource(),
                    min_size=settings.db_pool_min_size,
                    max_size=settings.db_pool_max_size,
                    kwargs=connection_kwargs(settings),
                    open=False,
                )
                pool.open()
                log.info(
                    "Connection pool opened",
                    extra={
                        "env": settings.app_env,
                        "min_size": settings.db_pool_min_size,
                        "max_size": settings.db_pool_max_size,
                    },
                )
                self._pool = pool
            return self._pool

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        """
        Context manager for obtaining a connection from the pool.

        The connection's transaction is committed on a clean exit and rolled
        back if the block raises.

        Example
        -------
            manager = PoolManager(settings)
            with manager.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
        """
        pool = self.get_pool()
        with pool.connection() as conn:
            yield conn

    def close(self) -> None:
        """
        Close the managed pool and release resources.

        Called from the application shutdown hook.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                    log.info("Connection pool closed")
                finally:
                    self._pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(settings: Settings) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off operations such as schema bootstrap. Request handling
    goes through the pool.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(settings.datasource(), **connection_kwargs(settings))


__all__ = [
    "PoolManager",
    "connection_kwargs",
    "get_sync_connection",
]
