"""
Pytest configuration for the Artworks API.

Provides fixtures for:
- Settings isolated from the developer's environment
- In-memory repositories (empty and seeded) and an HTTP test client
- PostgreSQL connection management for integration tests
"""

from __future__ import annotations

import os
from typing import Generator, Iterator

import psycopg
import pytest
from fastapi.testclient import TestClient

from artworks_api.api.app import create_app
from artworks_api.config import Settings
from artworks_api.domain.models import Artwork
from artworks_api.infrastructure.db_factory import PoolManager
from artworks_api.infrastructure.schema import init_schema
from artworks_api.repositories.memory import InMemoryArtworkRepository

SEEDED_CREATED_AT = 1489140631


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Database parts can be overridden via environment variables in CI.
    """
    return Settings(
        _env_file=None,
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "artworks"),
        log_level="DEBUG",
    )


@pytest.fixture
def memory_repository() -> InMemoryArtworkRepository:
    return InMemoryArtworkRepository()


@pytest.fixture
def seeded_repository() -> InMemoryArtworkRepository:
    """
    In-memory store holding two artworks with ids 1 and 2.
    """
    return InMemoryArtworkRepository(
        [
            Artwork(id=1, rei="#EU82REE", created_at=SEEDED_CREATED_AT, tit="Vista de Mahón"),
            Artwork(id=2, rei="#F423432", created_at=SEEDED_CREATED_AT + 2, aut="Desconocido"),
        ]
    )


@pytest.fixture
def client(
    test_settings: Settings, seeded_repository: InMemoryArtworkRepository
) -> Iterator[TestClient]:
    """
    HTTP client for an application backed by `seeded_repository`.
    """
    app = create_app(settings=test_settings, repository=seeded_repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def db_connection_available(test_settings: Settings) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_settings.datasource(), connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_settings: Settings, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection with the schema initialized.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_settings.datasource())
    try:
        init_schema(conn)
        yield conn
    finally:
        conn.close()


@pytest.fixture
def clean_artworks_table(db_connection: psycopg.Connection) -> Iterator[None]:
    """
    Empty the artworks table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE artworks RESTART IDENTITY;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE artworks RESTART IDENTITY;")
    db_connection.commit()


@pytest.fixture
def pool_manager(test_settings: Settings, clean_artworks_table: None) -> Iterator[PoolManager]:
    manager = PoolManager(test_settings)
    try:
        yield manager
    finally:
        manager.close()
