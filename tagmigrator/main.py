"""
Command line entry point.

Usage:
    tagmigrator vcenter.example.com --user administrator@vsphere.local
"""

import asyncio
import logging

import click
import httpx
from pydantic import ValidationError

from tagmigrator import __version__
from tagmigrator.client import RestManagementClient, get_client
from tagmigrator.config import get_settings
from tagmigrator.core.exceptions import MigrationException
from tagmigrator.schemas import MigrationReport
from tagmigrator.services import MigrationService
from tagmigrator.services.migration_service import logger as progress_logger

logger = logging.getLogger("tagmigrator")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Progress lines are console output, shown at any level
    progress_logger.setLevel(min(numeric_level, logging.INFO))
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def migrate(client: RestManagementClient) -> MigrationReport:
    """Open the session, run the migration and close the session."""
    try:
        async with client:
            return await MigrationService(client).run()
    finally:
        logger.info(f"{client.base_url}: {client.metrics.summary()}")


@click.command()
@click.argument("server")
@click.option("--user", "-u", default=None, help="Account used to log in (defaults to TAGMIGRATOR_USERNAME).")
@click.option("--password", "-p", default=None, help="Password (defaults to TAGMIGRATOR_PASSWORD, prompted if unset).")
@click.option("--insecure", is_flag=True, help="Do not verify the server certificate.")
@click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (defaults to TAGMIGRATOR_LOG_LEVEL).",
)
@click.version_option(__version__, prog_name="tagmigrator")
def cli(
    server: str,
    user: str | None,
    password: str | None,
    insecure: bool,
    timeout: float | None,
    log_level: str | None,
) -> None:
    """Convert the custom attributes of SERVER into tag categories and tags."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    configure_logging(log_level or settings.LOG_LEVEL)

    username = user or settings.USERNAME
    if username and password is None and settings.PASSWORD is None:
        password = click.prompt(f"Password for {username}", hide_input=True)

    client = get_client(
        server,
        settings,
        username=username,
        password=password,
        verify_ssl=False if insecure else None,
        timeout=timeout,
    )

    try:
        report = asyncio.run(migrate(client))
    except MigrationException as e:
        raise click.ClickException(e.message) from e
    except httpx.HTTPError as e:
        raise click.ClickException(f"Request to {client.base_url} failed: {e}") from e

    click.echo(report.summary())


if __name__ == "__main__":
    cli()
