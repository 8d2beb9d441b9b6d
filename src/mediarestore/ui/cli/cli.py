"""Command line interface for mediarestore."""

import sys
from typing import final

from mediarestore.application.services.restore_service import ProjectRestoreReport
from mediarestore.features.restoration import RestorationError
from mediarestore.platform.logging import logger
from mediarestore.ui.cli.args import ArgumentParser
from mediarestore.ui.cli.args.options import CheckArgs, CLIArgs, SnapshotArgs
from mediarestore.ui.cli.commands import CheckCommand, SnapshotCommand

EXIT_ERROR = 1
EXIT_UNRESOLVED = 2
EXIT_INTERRUPTED = 130


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

            if isinstance(args, SnapshotArgs):
                _ = SnapshotCommand(args).execute()
                return

            assert isinstance(args, CheckArgs)
            reports = CheckCommand(args).execute()
            if CommandProcessor._has_unresolved(reports):
                sys.exit(EXIT_UNRESOLVED)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(EXIT_INTERRUPTED)
        except RestorationError as e:
            logger.error("%s", e)
            sys.exit(EXIT_ERROR)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(EXIT_ERROR)

    @staticmethod
    def _has_unresolved(reports: list[ProjectRestoreReport]) -> bool:
        """Return True when a project still has missing files nobody decided on."""

        return any(report.unresolved > 0 for report in reports)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit`` inside :meth:`CommandProcessor.process_command`.
    """
    CommandProcessor.process_command()
    return 0
