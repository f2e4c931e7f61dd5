"""Command line entry point for running the API server.

Usage:
    movie-api serve
    movie-api serve --port 8080 --reload
"""

from __future__ import annotations

import sys

import click
import uvicorn

from movie_api.settings import get_settings


@click.group()
def main() -> None:
    """Movie search backend."""


@main.command()
@click.option("--host", type=str, default=None, help="Interface to bind (defaults to HOST).")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT).")
@click.option("--reload", is_flag=True, help="Restart the server when code changes.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the API with uvicorn after validating configuration."""

    settings = get_settings()
    errors = settings.required_config_errors()
    if errors:
        for error in errors:
            click.echo(f"❌ Error: {error}", err=True)
        click.echo("   Please add OMDB_API_KEY to your .env file", err=True)
        sys.exit(1)

    uvicorn.run(
        "movie_api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
