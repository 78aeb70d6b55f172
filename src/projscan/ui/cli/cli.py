"""Command line interface for projscan."""

import sys
from typing import final

from projscan.platform.logging import logger
from projscan.shared.errors import AlreadyProcessing, ProjScanError
from projscan.ui.cli.args import ArgumentParser
from projscan.ui.cli.args.options import CLIArgs, ClearArgs, RunArgs, ScanArgs
from projscan.ui.cli.commands import ClearCommand, RunCommand, ScanCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ScanArgs):
                _ = ScanCommand(args).execute()
                return

            if isinstance(args, RunArgs):
                result = RunCommand(args).execute()
                if not result.succeeded:
                    sys.exit(1)
                return

            if isinstance(args, ClearArgs):
                ClearCommand(args).execute()
                return

            logger.error("Unsupported command: %s", args.command)
            sys.exit(2)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except AlreadyProcessing as e:
            logger.error("%s", e)
            sys.exit(1)
        except ProjScanError as e:
            logger.error("%s: %s", type(e).__name__, e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
