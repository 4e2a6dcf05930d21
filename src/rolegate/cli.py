"""Command-line interface for RoleGate.

This module provides the CLI commands for running and managing
the RoleGate service.
"""

import asyncio

import click

from rolegate import __version__
from rolegate.core.config import get_settings
from rolegate.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="RoleGate")
def cli() -> None:
    """RoleGate - role-based authorization service.

    Settings are read from ROLEGATE_* environment variables and .env.
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
    """Start the RoleGate server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.is_sqlite:
        click.echo("ERROR: SQLite does not support multiple worker processes.", err=True)
        raise SystemExit(1)

    # Configure logging before starting server
    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting RoleGate server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "rolegate.infrastructure.api.app:create_app",
        factory=True,
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
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all tables and the reserved superadmin role. Use this only in
    development; in production, run the Alembic migrations instead.
    """
    from rolegate.infrastructure.persistence.database import DatabaseManager
    from rolegate.infrastructure.persistence.seed import ensure_superadmin_role

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
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
            await db.create_tables()
            await ensure_superadmin_role(db)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def seed_permissions(file: str) -> None:
    """Load permissions from a JSON FILE into the catalog.

    FILE holds a list of names or of {"name", "description"} objects.
    Permissions already in the catalog are skipped.
    """
    from rolegate.infrastructure.persistence.database import DatabaseManager
    from rolegate.infrastructure.persistence.seed import load_permission_file
    from rolegate.infrastructure.persistence.seed import seed_permissions as seed

    settings = get_settings()
    configure_logging(settings)

    try:
        entries = load_permission_file(file)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    async def run() -> int:
        db = DatabaseManager(settings)
        try:
            return await seed(db, entries)
        finally:
            await db.disconnect()

    created = asyncio.run(run())
    click.echo(f"Seeded {created} new permission(s), {len(entries) - created} already present.")


@cli.command()
def info() -> None:
    """Display RoleGate configuration."""
    settings = get_settings()

    click.echo(f"""
RoleGate v{settings.app_version}
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
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Principal headers:
  ID:           {settings.principal_id_header}
  Role hint:    {settings.principal_role_header}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI.

    This function is called when the `rolegate` command is run
    or when using `python -m rolegate`.
    """
    cli()


if __name__ == "__main__":
    main()
