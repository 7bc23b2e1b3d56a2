"""
Seed script for the Artworks API.

Generates deterministic pseudo-random artworks and inserts them through the
PostgreSQL repository, so seeded rows go through the same INSERT statement
the API uses.
"""

from __future__ import annotations

import random
import sys
import time
from typing import List, Optional

import typer

from artworks_api.config import get_settings
from artworks_api.domain.models import Artwork, Insert
from artworks_api.infrastructure.db_factory import PoolManager
from artworks_api.repositories.postgres import PostgresArtworkRepository

app = typer.Typer(help="Insert synthetic artworks into Postgres.")

_AUTHORS = ["Desconocido", "Anónimo", "J. Torres", "M. Pons", "A. Vidal"]
_PLACES = ["Mahón", "Ciutadella", "Alaior", "Es Castell", "Ferreries"]
_TECHNIQUES = ["Óleo sobre lienzo", "Acuarela", "Grabado", "Talla en madera"]
_OWNERS = ["Ayuntamiento de Mahón", "Museu de Menorca", "Colección privada"]


def _generate_artworks(count: int, seed: int, created_at: Optional[int] = None) -> List[Artwork]:
    rng = random.Random(seed)
    now = created_at if created_at is not None else int(time.time())
    artworks: List[Artwork] = []
    for i in range(count):
        artworks.append(
            Artwork(
                rei=f"#{rng.randint(0, 0xFFFFFF):06X}",
                created_at=now,
                ubi=rng.choice(_PLACES),
                pro=rng.choice(_OWNERS),
                tit=f"Obra {i + 1}",
                aut=rng.choice(_AUTHORS),
                fec=str(rng.randint(1700, 2000)),
                lug=rng.choice(_PLACES),
                tec=rng.choice(_TECHNIQUES),
                dim=f"{rng.randint(10, 200)} x {rng.randint(10, 200)} cm",
            )
        )
    return artworks


@app.command()
def main(
    rows: int = typer.Option(
        25,
        "--rows",
        "-r",
        help="Number of artworks to insert.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Only generate and print; skip inserting into Postgres.",
    ),
) -> None:
    """
    Generate synthetic artworks and insert them one by one.
    """
    artworks = _generate_artworks(rows, seed=seed)
    typer.echo(f"Generated {len(artworks)} artworks (seed={seed})")

    if dry_run:
        for artwork in artworks:
            typer.echo(artwork.model_dump_json())
        return

    manager = PoolManager(get_settings())
    repository = PostgresArtworkRepository(manager)
    start = time.perf_counter()
    try:
        for artwork in artworks:
            repository.save(Insert(artwork))
    finally:
        manager.close()
    typer.echo(f"Inserted {len(artworks)} artworks in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
