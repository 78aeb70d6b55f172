"""Command line interface package."""

from projscan.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
