"""Command-line interface for Hospeda.

This module provides the CLI commands for running and managing
the Hospeda application.
"""

import asyncio
from datetime import timedelta

import click

from hospeda import __version__
from hospeda.core.config import get_settings
from hospeda.core.logging import configure_logging, get_logger
from hospeda.domain.entities.role import Role


@click.group()
@click.version_option(version=__version__, prog_name="Hospeda")
def cli() -> None:
    """Hospeda - permission-aware CRUD API for tourism listings.

    Configuration is read from HOSPEDA_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the Hospeda server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and not reload and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. Use --workers 1.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Hospeda server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "hospeda.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt (required in production)",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all database tables and seeds the default role permissions.
    """
    from hospeda.infrastructure.persistence.database import DatabaseManager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Pass --force to initialize the database.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.argument("user_id")
@click.option(
    "--role",
    type=click.Choice([role.value for role in Role if role is not Role.GUEST]),
    default=Role.USER.value,
    show_default=True,
    help="Role claimed by the token",
)
@click.option(
    "--expires-minutes",
    type=int,
    default=None,
    help="Token lifetime in minutes (defaults to config)",
)
def issue_token(user_id: str, role: str, expires_minutes: int | None) -> None:
    """Issue an access token for USER_ID.

    Intended for development and operations; the token is printed to stdout.
    """
    from hospeda.infrastructure.auth import JWTService

    settings = get_settings()
    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    token = JWTService(settings.secret_key).create_access_token(
        user_id,
        role,
        expires_delta=expires_delta,
    )
    click.echo(token)


@cli.command()
def info() -> None:
    """Display Hospeda configuration."""
    settings = get_settings()

    click.echo(f"""
Hospeda v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Webhook Sig:  {"enabled" if settings.webhook_secret else "disabled"}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI.

    This function is called when the `hospeda` command is run
    or when using `python -m hospeda`.
    """
    cli()


if __name__ == "__main__":
    main()
