"""Command line argument handling package."""

from projscan.ui.cli.args.parser import ArgumentParser
from projscan.ui.cli.args.options import CLIArgs, ClearArgs, RunArgs, ScanArgs

__all__ = ["ArgumentParser", "CLIArgs", "ClearArgs", "RunArgs", "ScanArgs"]
