"""Display management for CLI interface."""

from projscan.ui.cli.display.changes import ChangeDisplay
from projscan.ui.cli.display.progress import ProgressDisplay
from projscan.ui.cli.display.report import ReportDisplay

__all__ = ["ChangeDisplay", "ProgressDisplay", "ReportDisplay"]
