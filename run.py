#!/usr/bin/env python3
"""
Application Entry Script.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action init-db
    python run.py --action config
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notedesk.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "init-db", "config", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    Notedesk Entry Point.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Create the data directory and schema
        python run.py --action init-db

        # View loaded configuration
        python run.py --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "init-db":
        init_db(logger)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server."""
    from notedesk.core.config import get_server_address

    default_host, default_port = get_server_address()
    server_host = host or default_host
    server_port = port or default_port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "notedesk.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


async def _open_and_count(url: str) -> int:
    from notedesk.core.database import open_database
    from notedesk.repositories.note import NoteRepository

    async with open_database(url) as database:
        async with database.session() as session:
            return await NoteRepository(session).count()


def init_db(logger) -> None:
    """Open the note store once, creating directory and schema if missing."""
    from notedesk.core.config import get_database_url

    url = get_database_url()
    try:
        count = asyncio.run(_open_and_count(url))
    except Exception as e:
        logger.error("Database initialization failed", extra={"error": str(e)})
        click.echo(click.style(f"Error initializing database: {e}", fg="red"))
        sys.exit(1)

    click.echo(click.style("Database ready", fg="green"))
    click.echo(f"  url:   {url}")
    click.echo(f"  notes: {count}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from notedesk.core.config import get_app_config, get_database_url

        app_config = get_app_config()

        sections = {
            "Application Settings (from YAML)": app_config.application.model_dump(),
            "Database Settings (from YAML)": app_config.database.model_dump(),
            "Logging Settings (from YAML)": app_config.logging.model_dump(),
        }
        for title, values in sections.items():
            click.echo(f"{title}:")
            click.echo("-" * 40)
            for key, value in values.items():
                if isinstance(value, dict):
                    click.echo(f"  {key}:")
                    for k, v in value.items():
                        click.echo(f"    {k}: {v}")
                else:
                    click.echo(f"  {key}: {value}")
            click.echo()

        click.echo(f"Effective database URL: {get_database_url()}")
        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from notedesk.core.config import get_app_config

    app_settings = get_app_config().application
    click.echo(app_settings.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app_settings.version}")
    click.echo(f"Description: {app_settings.description}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server    Start the API server")
    click.echo("  --action init-db   Create the data directory and schema")
    click.echo("  --action config    Display configuration")
    click.echo("  --action info      Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v      Enable INFO level logging")
    click.echo("  --debug, -d        Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
