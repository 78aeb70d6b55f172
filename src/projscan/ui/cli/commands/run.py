"""src/projscan/ui/cli/commands/run.py
What: Execute the full scan and dispatch pipeline from the CLI.
Why: Bridge parsed arguments with the application service and report displays.
"""

from __future__ import annotations

from typing import final

from projscan.application.services.scan_service import PipelineResult
from projscan.ui.cli.args.options import RunArgs
from projscan.ui.cli.commands.context import open_scan_service
from projscan.ui.cli.commands.scan import ServiceFactory
from projscan.ui.cli.display.changes import ChangeDisplay
from projscan.ui.cli.display.progress import ProgressDisplay
from projscan.ui.cli.display.report import ReportDisplay


@final
class RunCommand:
    """Scan a project and run category handlers for what changed."""

    def __init__(self, args: RunArgs, service_factory: ServiceFactory | None = None) -> None:
        self.args = args
        self.service_factory: ServiceFactory = service_factory or open_scan_service
        self.progress_display = ProgressDisplay()
        self.change_display = ChangeDisplay()
        self.report_display = ReportDisplay()

    def execute(self) -> PipelineResult:
        """Execute the run command."""

        with self.service_factory(drive=self.args.drive) as service:
            result = self.progress_display.run(
                lambda observer: service.run(self.args.project, observer),
                quiet=self.args.quiet,
            )
        self.change_display.show_changes(result.scan, quiet=self.args.quiet)
        self.report_display.show_report(result, quiet=self.args.quiet)
        return result
