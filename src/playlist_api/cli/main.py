"""playlist-api CLI — run the server or prepare the database.

Usage:
    playlist-api serve                 # Run the HTTP API (uvicorn)
    playlist-api serve --port 8080     # Override PORT
    playlist-api init-db               # Create tables and exit

Both commands need DB_PASS and JWT_SECRET in the environment. If either
is missing the command prints which one and exits with status 1 before
anything else starts.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
from pydantic import ValidationError

from playlist_api import __version__
from playlist_api.config import Settings, load_settings, missing_secrets

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _settings_or_exit() -> Settings:
    """Load settings, or report the missing secrets and exit(1)."""
    try:
        return load_settings()
    except ValidationError as e:
        names = missing_secrets(e)
        if not names:
            click.secho(f"Invalid configuration: {e}", fg="red", err=True)
        for name in names:
            click.secho(f"{name} environment variable must be set!", fg="red", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="playlist-api")
def cli():
    """Playlist API server."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port (default: PORT or 3000)")
def serve(host: Optional[str], port: Optional[int]):
    """Run the HTTP API."""
    settings = _settings_or_exit()

    import uvicorn

    from playlist_api.main import create_app

    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level="debug" if settings.debug else "info",
    )


@cli.command("init-db")
def init_db():
    """Create all tables and exit."""
    settings = _settings_or_exit()

    from playlist_api.db.engine import build_engine, create_tables

    async def _init():
        engine = build_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    click.secho(f"Tables ready in {settings.db_name}", fg="green")


if __name__ == "__main__":
    cli()
