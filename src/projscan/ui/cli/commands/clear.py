"""Clear command implementation for the CLI."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import final

from rich.console import Console

from projscan.features.snapshot import ScanHistoryStore
from projscan.ui.cli.args.options import ClearArgs
from projscan.ui.cli.commands.context import open_history

HistoryFactory = Callable[[], AbstractContextManager[ScanHistoryStore]]


@final
class ClearCommand:
    """Forget stored scan history for one project or all of them."""

    def __init__(self, args: ClearArgs, history_factory: HistoryFactory | None = None) -> None:
        self.args = args
        self.history_factory: HistoryFactory = history_factory or open_history
        self.console = Console()

    def execute(self) -> None:
        with self.history_factory() as history:
            history.clear(self.args.project)
        if not self.args.quiet:
            target = self.args.project if self.args.project is not None else "all projects"
            self.console.print(f"[green]Cleared scan history for {target}.[/green]")
