"""
azure-purge CLI - Azure Image, Blob and Resource Group Purger

Main entry point for the command-line interface.
"""

import sys
from datetime import timedelta
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .core.azure_client import AzureClient
from .core.config import (
    DEFAULT_CONTAINER,
    DEFAULT_KEEP_IMAGES,
    DEFAULT_RESOURCE_GROUP,
    DEFAULT_STORAGE_ACCOUNT,
    PurgeConfig,
    parse_duration,
)
from .core.exceptions import AzurePurgeError, ConfigError
from .core.logging import setup_logging
from .purge_manager import PurgeManager
from .reporters.cli_reporter import CLIReporter


console = Console()


def validate_duration(ctx, param, value: str) -> timedelta:
    """Parse a duration option such as '6h' or '3d'."""
    try:
        return parse_duration(value)
    except ConfigError as e:
        raise click.BadParameter(e.message)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="azure-purge")
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    default=False,
    help="Print what would be deleted without actually deleting",
)
@click.option(
    "--subscription-id",
    envvar="AZURE_SUBSCRIPTION_ID",
    required=True,
    help="Azure subscription ID (env: AZURE_SUBSCRIPTION_ID)",
)
@click.option(
    "--resource-group",
    envvar="AZURE_PURGE_RESOURCE_GROUP",
    default=DEFAULT_RESOURCE_GROUP,
    show_default=True,
    help="Resource group holding the images and the storage account",
)
@click.option(
    "--storage-account",
    envvar="AZURE_PURGE_STORAGE_ACCOUNT",
    default=DEFAULT_STORAGE_ACCOUNT,
    show_default=True,
    help="Storage account holding the VHD blobs",
)
@click.option(
    "--container",
    envvar="AZURE_PURGE_CONTAINER",
    default=DEFAULT_CONTAINER,
    show_default=True,
    help="Blob container holding the VHD blobs",
)
@click.option(
    "--keep-images",
    default=DEFAULT_KEEP_IMAGES,
    show_default=True,
    type=click.IntRange(min=1),
    help="Images kept per name prefix",
)
@click.option(
    "--build-timeout",
    default="6h",
    show_default=True,
    callback=validate_duration,
    help="Grace period for new images and blobs (e.g. 30m, 6h, 1d)",
)
@click.option(
    "--group-timeout",
    default="3d",
    show_default=True,
    callback=validate_duration,
    help="Lifetime of resource groups tagged 'now' (e.g. 12h, 3d)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Also write logs to this file",
)
def cli(
    dry_run: bool,
    subscription_id: str,
    resource_group: str,
    storage_account: str,
    container: str,
    keep_images: int,
    build_timeout: timedelta,
    group_timeout: timedelta,
    log_level: str,
    log_file: Optional[str],
):
    """
    Delete stale Azure images, VHD blobs and resource groups.

    Runs four routines in order:

    \b
    1. Images not tagged valid=true, once older than the build timeout
    2. Images beyond the newest --keep-images of each name prefix
    3. Blobs with no matching image, once older than the build timeout
    4. Resource groups whose 'now' tag is older than the group timeout

    Examples:

        # Preview what would be deleted (safe)
        azure-purge -n

        # Purge with a longer build grace period
        azure-purge --build-timeout 12h
    """
    setup_logging(level=log_level, log_file=log_file)
    reporter = CLIReporter(console)

    try:
        config = PurgeConfig(
            subscription_id=subscription_id,
            resource_group=resource_group,
            storage_account=storage_account,
            container=container,
            keep_images=keep_images,
            build_timeout=build_timeout,
            group_timeout=group_timeout,
            dry_run=dry_run,
        )
        reporter.print_start(config)

        with AzureClient(config) as client:
            client.validate_credentials()
            manager = PurgeManager(
                client,
                config,
                decision_callback=reporter.print_decision,
            )
            run = manager.run(progress_callback=reporter.print_routine_result)

        reporter.report_run(run)

    except AzurePurgeError as e:
        reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Purge interrupted by user.[/yellow]")
        sys.exit(130)
    except Exception as e:
        reporter.print_error(str(e))
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
