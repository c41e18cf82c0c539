"""
CLI Reporter Module
===================

Provides terminal output for purge runs using the Rich library.

Classes
-------
CLIReporter
    Main reporter class for terminal output.

Example
-------
>>> from azure_purge.reporters import CLIReporter
>>>
>>> reporter = CLIReporter()
>>> reporter.print_start(config)
>>> manager = PurgeManager(client, config, decision_callback=reporter.print_decision)
>>> reporter.report_run(manager.run())

See Also
--------
rich : Python library for rich text and formatting.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from azure_purge.cleaners.delete_executor import describe_decision
from azure_purge.core.base_purger import PurgeResult
from azure_purge.core.config import PurgeConfig
from azure_purge.purge_manager import PurgeRunResult

# Module logger
logger = logging.getLogger(__name__)


class CLIReporter:
    """
    Reporter for displaying purge progress and results in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the CLI reporter with a Rich Console."""
        self.console = console or Console()

    def print_start(self, config: PurgeConfig) -> None:
        """
        Print the start banner, and the dry-run panel when applicable.

        Parameters
        ----------
        config : PurgeConfig
            Configuration of the run about to start.
        """
        self.console.print("Start azure-purge")

        if config.dry_run:
            self.console.print(
                Panel(
                    "[yellow bold]DRY-RUN MODE[/yellow bold]\n"
                    "No resources will actually be deleted.",
                    border_style="yellow",
                )
            )

        header_text = Text()
        header_text.append(f"Resource group: {config.resource_group}\n", style="dim")
        header_text.append(
            f"Blobs: {config.storage_account}/{config.container}\n", style="dim"
        )
        header_text.append(
            f"Purge time: {config.now.strftime('%Y-%m-%d %H:%M:%S UTC')}", style="dim"
        )
        self.console.print(header_text)

    def print_decision(self, resource_type: str, name: str) -> None:
        """
        Print one deletion decision.

        Printed identically in dry-run and live mode, before the delete is
        issued.

        Parameters
        ----------
        resource_type : str
            Resource type, e.g. 'image' or 'resource_group'.
        name : str
            Resource name.
        """
        self.console.print(
            describe_decision(resource_type, name),
            markup=False,
            highlight=False,
        )

    def print_routine_result(self, result: PurgeResult) -> None:
        """Print a one-line completion note for a routine."""
        verb = "would delete" if result.dry_run else "deleted"
        self.console.print(
            f"  [dim]{result.routine}: {verb} {result.selected_count} "
            f"of {result.total_count}[/dim]"
        )

    def report_run(self, run: PurgeRunResult) -> None:
        """
        Print the summary table of a purge run.

        Parameters
        ----------
        run : PurgeRunResult
            Results of every routine.
        """
        table = Table(
            title="\nPurge Summary",
            title_style="bold",
            show_lines=False,
        )
        table.add_column("Routine", style="cyan", no_wrap=True)
        table.add_column("Listed", justify="right")
        table.add_column("Kept", justify="right", style="green")
        table.add_column(
            "Would delete" if run.dry_run else "Deleted",
            justify="right",
            style="blue" if run.dry_run else "red",
        )

        for result in run.results:
            table.add_row(
                result.routine,
                str(result.total_count),
                str(result.kept_count),
                str(result.selected_count),
            )

        self.console.print(table)
        self.console.print("\n[green bold]Purge complete![/green bold]")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"\n[red bold]Error:[/red bold] {escape(message)}")

    def __repr__(self) -> str:
        """Return string representation."""
        return "CLIReporter()"
