"""Processing report rendering for the ``run`` command."""

from __future__ import annotations

from typing import final

from rich.console import Console

from projscan.application.services.scan_service import PipelineResult
from projscan.features.processing import ProcessingFailure


@final
class ReportDisplay:
    """Render per-category processing outcomes."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def show_report(self, result: PipelineResult, *, quiet: bool = False) -> None:
        """Render a formatted summary of the dispatch outcomes.

        Failures are shown even in quiet mode.
        """
        report = result.report
        failures = report.failures

        if not quiet:
            self.console.print("\n[bold]Processing Summary:[/bold]")
            self.console.print(f"Categories processed: {len(report.processed_categories)}")
            self.console.print(f"[green]Succeeded: {report.success_count}[/green]")
            if report.cancelled:
                self.console.print("[yellow]Processing was cancelled before all categories ran.[/yellow]")

        if not failures:
            return

        self.console.print(f"[red]Failed: {report.error_count}[/red]")
        for failure in failures:
            self.console.print(f"[red]  - {failure.category}: {self._describe(failure)}[/red]")

    @staticmethod
    def _describe(failure: ProcessingFailure) -> str:
        if failure.error_type:
            return f"{failure.error_message} ({failure.error_type})"
        return failure.error_message
