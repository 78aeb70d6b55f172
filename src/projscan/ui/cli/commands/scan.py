"""Scan command implementation for the CLI."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import final

from projscan.application.services.scan_service import ProjectScanService, ScanResult
from projscan.ui.cli.args.options import ScanArgs
from projscan.ui.cli.commands.context import open_scan_service
from projscan.ui.cli.display.changes import ChangeDisplay
from projscan.ui.cli.display.progress import ProgressDisplay

ServiceFactory = Callable[..., AbstractContextManager[ProjectScanService]]


@final
class ScanCommand:
    """Show what changed since the last run, without processing it."""

    def __init__(self, args: ScanArgs, service_factory: ServiceFactory | None = None) -> None:
        self.args = args
        self.service_factory: ServiceFactory = service_factory or open_scan_service
        self.progress_display = ProgressDisplay()
        self.change_display = ChangeDisplay()

    def execute(self) -> ScanResult:
        """Execute the scan command."""

        with self.service_factory(drive=self.args.drive) as service:
            result = self.progress_display.run(
                lambda observer: service.scan(
                    self.args.project,
                    observer,
                    record=self.args.record,
                ),
                quiet=self.args.quiet,
            )
        self.change_display.show_changes(result, quiet=self.args.quiet, recorded=self.args.record)
        return result
