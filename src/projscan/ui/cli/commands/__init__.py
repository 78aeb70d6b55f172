"""Command execution package for CLI."""

from projscan.ui.cli.commands.clear import ClearCommand
from projscan.ui.cli.commands.run import RunCommand
from projscan.ui.cli.commands.scan import ScanCommand

__all__ = ["ClearCommand", "RunCommand", "ScanCommand"]
