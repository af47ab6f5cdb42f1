"""CLI entry point for ScholarTrack."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import uvicorn

from scholartrack import __version__
from scholartrack.config import ConfigError, load_settings
from scholartrack.logging import setup_logging


@click.group()
@click.version_option(__version__)
def main() -> None:
    """ScholarTrack - student records management."""
    pass


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML settings file",
)
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(host: str, port: int, config_path: Path | None, reload: bool, verbose: bool) -> None:
    """Run the ScholarTrack web API."""
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    secrets = (settings.remote.public_key,) if settings.remote.public_key else ()
    setup_logging(level="DEBUG" if verbose else None, secrets=secrets)

    if not settings.remote.has_credentials:
        click.echo(
            "Warning: APPER_PROJECT_ID / APPER_PUBLIC_KEY are not set; "
            "student data will be unavailable.",
            err=True,
        )

    if reload:
        # The reloader imports the app by path, so settings come from the environment
        uvicorn.run("scholartrack.api.app:app", host=host, port=port, reload=True)
        return

    from scholartrack.api.app import create_app  # noqa: PLC0415

    uvicorn.run(create_app(settings), host=host, port=port)


@main.command("check-config")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML settings file",
)
def check_config(config_path: Path | None) -> None:
    """Validate settings and report what is configured."""
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Record store: {settings.remote.base_url}")
    click.echo(f"  Credentials: {'present' if settings.remote.has_credentials else 'MISSING'}")
    click.echo(f"Preferences DB: {settings.db_path}")
    click.echo(f"Page size: {settings.page_size}")

    if not settings.remote.has_credentials:
        sys.exit(1)


if __name__ == "__main__":
    main()
