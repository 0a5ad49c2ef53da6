"""Command line interface for CMYM."""

import sys
from typing import final

from cmym.features.proposals import UnknownStageError
from cmym.platform.logging import logger
from cmym.platform.snapshot import SnapshotError
from cmym.ui.cli.args import ArgumentParser
from cmym.ui.cli.args.options import CLIArgs, ReviewArgs
from cmym.ui.cli.commands import ReviewCommand, StagesCommand


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

            if isinstance(args, ReviewArgs):
                summary = ReviewCommand(args).execute()
                if summary.write_failures or (summary.rename and summary.rename.failed):
                    sys.exit(1)
                return

            _ = StagesCommand().execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except (UnknownStageError, SnapshotError) as e:
            logger.error("%s", e)
            sys.exit(2)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Underlying command processing
        calls ``sys.exit(...)`` on errors, so this return is only reached
        when processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
