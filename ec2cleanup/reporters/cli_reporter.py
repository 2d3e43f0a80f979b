"""
CLI Reporter Module
===================

Prints the outcome of a cleanup run in the terminal using Rich.

Classes
-------
CLIReporter
    Renders a CleanupReport as a header panel and a summary table.

Example
-------
>>> from ec2cleanup.reporters import CLIReporter
>>>
>>> reporter = CLIReporter()
>>> reporter.report(cleanup_report)

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

from ec2cleanup.cleaners.results import CleanupReport, DeleteStatus, DeleteSummary

# Module logger
logger = logging.getLogger(__name__)


class CLIReporter:
    """
    Reporter for displaying cleanup results in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        logger.debug("Initialized CLIReporter")

    def report(self, report: CleanupReport) -> None:
        """
        Print the header, the per-kind summary and any failures.

        Parameters
        ----------
        report : CleanupReport
            Outcome of a cleanup run.
        """
        self._print_header(report)
        self._print_summary(report)
        self._print_failures(report)

    def _print_header(self, report: CleanupReport) -> None:
        header_text = Text()
        mode = "Check" if report.check_only else "Cleanup"
        header_text.append(f"\nEC2 {mode} Report\n", style="bold blue")
        header_text.append(
            f"Region: {report.region}   Pattern: '{report.name_pattern}'",
            style="dim",
        )
        self.console.print(Panel(header_text, border_style="yellow" if report.check_only else "blue"))

    def _print_summary(self, report: CleanupReport) -> None:
        table = Table(show_lines=False)
        table.add_column("Resource", style="cyan")
        table.add_column("Found", justify="right")
        if report.check_only:
            table.add_column("Would delete", justify="right", style="blue")
        else:
            table.add_column("Deleted", justify="right", style="green")
            table.add_column("Failed", justify="right", style="red")

        for summary in report.summaries:
            table.add_row(*self._summary_row(summary, report.check_only))

        if report.volumes_skipped:
            cells = ["Volume", "[dim]skipped (no tag API)[/dim]"]
            cells += [""] * (len(table.columns) - len(cells))
            table.add_row(*cells)

        self.console.print(table)

    @staticmethod
    def _summary_row(summary: DeleteSummary, check_only: bool) -> list:
        if check_only:
            return [summary.resource_type, str(summary.total), str(summary.dry_run)]
        return [
            summary.resource_type,
            str(summary.total),
            str(summary.deleted),
            str(summary.failed),
        ]

    def _print_failures(self, report: CleanupReport) -> None:
        failures = [
            result
            for summary in report.summaries
            for result in summary.results
            if result.status == DeleteStatus.FAILED
        ]
        if not failures:
            return

        self.console.print(f"\n[yellow]{len(failures)} deletion(s) failed:[/yellow]")
        for result in failures:
            note = " (rate limited)" if result.rate_limited else ""
            self.console.print(
                f"  [red]✗[/red] {result.resource_type} '{escape(result.resource_id)}'{note}: "
                f"{escape(result.error_message or '')}",
                highlight=False,
            )

    def __repr__(self) -> str:
        """Return string representation."""
        return "CLIReporter()"
