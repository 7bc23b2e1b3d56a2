from __future__ import annotations

import sys
from typing import Optional, get_args

import typer
import uvicorn
from rich import box
from rich.console import Console
from rich.table import Table

from artworks_api.api.app import create_app
from artworks_api.config import Environment, Settings, get_settings
from artworks_api.infrastructure.db_factory import get_sync_connection
from artworks_api.infrastructure.schema import init_schema
from artworks_api.repositories.memory import InMemoryArtworkRepository
from artworks_api.utils.logging import configure_logging

app = typer.Typer(help="Artworks API CLI.")


def _settings(environment: Optional[str]) -> Settings:
    settings = get_settings()
    if environment:
        if environment not in get_args(Environment):
            raise typer.BadParameter(
                f"unknown environment {environment!r}", param_hint="--environment"
            )
        settings = settings.model_copy(update={"app_env": environment})
    return settings


def _redacted_dsn(dsn: str) -> str:
    scheme, sep, rest = dsn.partition("://")
    if not sep or "@" not in rest:
        return dsn
    credentials, _, location = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{location}"


@app.command()
def info(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Running environment (development, preproduction)."
    ),
) -> None:
    """
    Show effective configuration values.
    """
    settings = _settings(environment)
    table = Table(title="Artworks API configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("environment", settings.app_env)
    table.add_row("datasource", _redacted_dsn(settings.datasource()))
    table.add_row("pool", f"min={settings.db_pool_min_size} max={settings.db_pool_max_size}")
    table.add_row("statement timeout (ms)", str(settings.db_statement_timeout_ms))
    table.add_row("http", f"{settings.http_host}:{settings.http_port}")
    table.add_row("log", f"{settings.log_level} json={settings.log_json}")
    Console(width=120).print(table)


@app.command("init-db")
def init_db(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Running environment (development, preproduction)."
    ),
) -> None:
    """
    Create the artworks table if it does not exist.
    """
    settings = _settings(environment)
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    with get_sync_connection(settings) as conn:
        init_schema(conn)
    typer.echo("artworks table ready.")


@app.command()
def serve(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Running environment (development, preproduction)."
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)."),
    in_memory: bool = typer.Option(
        False, "--in-memory", help="Serve from a process-local store instead of PostgreSQL."
    ),
) -> None:
    """
    Run the HTTP API.
    """
    settings = _settings(environment)
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    repository = InMemoryArtworkRepository() if in_memory else None
    api = create_app(settings=settings, repository=repository)
    uvicorn.run(
        api,
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_config=None,
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
