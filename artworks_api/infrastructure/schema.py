"""
Table bootstrap for the Artworks API.

Creates the `artworks` table when it does not exist yet. This is a one-shot
bootstrap for fresh databases, not a migration tool.
"""

from __future__ import annotations

from psycopg import Connection

from artworks_api.domain.models import DESCRIPTIVE_FIELDS, TABLE
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)


def artworks_ddl() -> str:
    """Return the CREATE TABLE statement, columns in `COLUMNS` order."""
    text_columns = ",\n".join(f"    {name} TEXT NOT NULL DEFAULT ''" for name in DESCRIPTIVE_FIELDS[1:])
    return (
        f"CREATE TABLE IF NOT EXISTS {TABLE} (\n"
        "    id SERIAL PRIMARY KEY,\n"
        "    rei TEXT NOT NULL DEFAULT '',\n"
        "    created_at BIGINT NOT NULL DEFAULT 0,\n"
        f"{text_columns}\n"
        ");"
    )


def init_schema(conn: Connection) -> None:
    """Create the artworks table on `conn` and commit."""
    with conn.cursor() as cur:
        cur.execute(artworks_ddl())
    conn.commit()
    log.info("Schema ready", extra={"table": TABLE})


__all__ = ["artworks_ddl", "init_schema"]
