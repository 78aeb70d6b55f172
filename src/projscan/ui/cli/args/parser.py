"""Command line argument parser."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from projscan.config.config import Config
from projscan.platform.logging import console_level_for, logger, setup_logger
from projscan.ui.cli.args.options import CLIArgs, ClearArgs, RunArgs, ScanArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="projscan",
            description="projscan - Detect changes in project category folders and process them.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        scan_parser = subparsers.add_parser(
            "scan",
            help="Preview what changed since the last run",
        )
        ArgumentParser._configure_project_parser(scan_parser)
        _ = scan_parser.add_argument(
            "--record",
            action="store_true",
            help="Accept the current state as processed without running handlers",
        )

        run_parser = subparsers.add_parser(
            "run",
            help="Scan a project and run category handlers for changed categories",
        )
        ArgumentParser._configure_project_parser(run_parser)

        clear_parser = subparsers.add_parser(
            "clear",
            help="Forget stored scan history",
        )
        _ = clear_parser.add_argument(
            "project",
            type=str,
            nargs="?",
            help="Project whose history is cleared",
            metavar="PROJECT",
        )
        _ = clear_parser.add_argument(
            "--all",
            action="store_true",
            help="Clear history for every project",
        )
        _ = clear_parser.add_argument(
            "--drive",
            action="store_true",
            help="Treat PROJECT as a Google Drive folder id",
        )
        _ = clear_parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the project does not exist or validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        console_level = console_level_for(
            quiet=bool(getattr(parsed_args, "quiet", False)),
            verbose=bool(getattr(parsed_args, "verbose", False)),
        )
        _ = setup_logger(Config.load(), console_level=console_level)

        command: str = parsed_args.command

        if command == "scan":
            return ScanArgs(
                command="scan",
                project=ArgumentParser._resolve_project(parsed_args.project, drive=parsed_args.drive),
                drive=parsed_args.drive,
                record=parsed_args.record,
                verbose=parsed_args.verbose,
                quiet=parsed_args.quiet,
            )

        if command == "run":
            return RunArgs(
                command="run",
                project=ArgumentParser._resolve_project(parsed_args.project, drive=parsed_args.drive),
                drive=parsed_args.drive,
                verbose=parsed_args.verbose,
                quiet=parsed_args.quiet,
            )

        if command == "clear":
            return ArgumentParser._process_clear(parser, parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _configure_project_parser(parser: argparse.ArgumentParser) -> None:
        """Apply shared configuration for project-scanning subparsers."""

        _ = parser.add_argument(
            "project",
            type=str,
            help="Project directory, or a Drive folder id with --drive",
            metavar="PROJECT",
        )
        _ = parser.add_argument(
            "--drive",
            action="store_true",
            help="Treat PROJECT as a Google Drive folder id",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_clear(parser: argparse.ArgumentParser, parsed_args: argparse.Namespace) -> ClearArgs:
        project: str | None = parsed_args.project
        if parsed_args.all and project:
            parser.error("PROJECT cannot be combined with --all")
        if not parsed_args.all and not project:
            parser.error("either PROJECT or --all is required")

        if project is not None and not parsed_args.drive:
            # History for local projects is keyed by resolved path; it may no longer exist.
            project = str(Path(project).expanduser().resolve())

        return ClearArgs(
            command="clear",
            project=project,
            drive=parsed_args.drive,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _resolve_project(project: str, *, drive: bool) -> str:
        if drive:
            return project.strip()

        project_path = Path(project).expanduser()
        if not project_path.is_dir():
            logger.error("Project directory does not exist: %s", project_path)
            sys.exit(1)
        return str(project_path.resolve())


__all__ = ["ArgumentParser"]
