"""Command line argument options."""

from dataclasses import dataclass
from typing import Literal, final


@final
@dataclass(slots=True)
class ScanArgs:
    """Command line arguments for the ``scan`` subcommand."""

    command: Literal["scan"]
    project: str
    drive: bool
    record: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class RunArgs:
    """Command line arguments for the ``run`` subcommand."""

    command: Literal["run"]
    project: str
    drive: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ClearArgs:
    """Command line arguments for the ``clear`` subcommand.

    ``project`` is ``None`` when history for every project is cleared.
    """

    command: Literal["clear"]
    project: str | None
    drive: bool
    quiet: bool


CLIArgs = ScanArgs | RunArgs | ClearArgs

__all__ = ["CLIArgs", "ClearArgs", "RunArgs", "ScanArgs"]
