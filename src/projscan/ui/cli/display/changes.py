"""Change set rendering for the ``scan`` and ``run`` commands."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.table import Table

from projscan.application.services.scan_service import ScanResult
from projscan.features.snapshot import ChangeKind

_KIND_STYLES: dict[ChangeKind, str] = {
    ChangeKind.NEW: "green",
    ChangeKind.CHANGED: "yellow",
    ChangeKind.DELETED: "red",
}


@final
class ChangeDisplay:
    """Render the differences found by a scan."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def show_changes(self, result: ScanResult, *, quiet: bool = False, recorded: bool = False) -> None:
        if quiet:
            return

        changes = result.changes
        project_id = result.snapshot.project_id
        if result.first_scan:
            self.console.print(f"\n[bold]First scan of {project_id}[/bold]")
        else:
            self.console.print(f"\n[bold]Changes in {project_id}[/bold]")

        if changes.is_empty:
            self.console.print("[green]No changes detected.[/green]")
        else:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Category")
            table.add_column("Change")
            table.add_column("File")
            table.add_column("Modified")
            for category in changes.ordered_changed_categories():
                for change in changes.changes_for(category):
                    style = _KIND_STYLES[change.kind]
                    table.add_row(
                        category,
                        f"[{style}]{change.kind.value}[/{style}]",
                        change.record.name,
                        change.record.modified_at.isoformat(timespec="seconds"),
                    )
            self.console.print(table)

        self.console.print(
            f"New: {len(changes.new_files)}  Changed: {len(changes.changed_files)}  "
            f"Deleted: {len(changes.deleted_files)}"
        )
        if changes.changed_categories:
            self.console.print(f"Changed categories: {', '.join(changes.ordered_changed_categories())}")
        if changes.removed_categories:
            removed = ", ".join(sorted(changes.removed_categories))
            self.console.print(f"[red]Removed categories: {removed}[/red]")
        if recorded:
            self.console.print("[yellow]Snapshot recorded: run will not process these changes.[/yellow]")
