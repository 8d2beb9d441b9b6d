"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from mediarestore.config.config import Config
from mediarestore.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from mediarestore.ui.cli.args.options import CheckArgs, CLIArgs, SnapshotArgs


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
            description="mediarestore - Reconnect a project's media references after files move.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        check_parser = subparsers.add_parser(
            "check",
            help="Check a project's media references and locate moved files",
        )
        _ = check_parser.add_argument(
            "project_path",
            type=str,
            help="Project JSON file, or a directory of project files",
            metavar="PROJECT",
        )
        _ = check_parser.add_argument(
            "--auto-resolve",
            action="store_true",
            help="Drop files that cannot be found instead of listing them for resolution",
        )
        _ = check_parser.add_argument(
            "--no-dialog",
            action="store_true",
            help="Do not start a resolution round for missing files",
        )
        _ = check_parser.add_argument(
            "--remove-missing",
            action="store_true",
            help="Resolve every missing file by removing it from the result",
        )
        _ = check_parser.add_argument(
            "--report",
            action="store_true",
            help="Print the plain-text restoration report",
        )
        ArgumentParser._add_verbosity(check_parser)

        snapshot_parser = subparsers.add_parser(
            "snapshot",
            help="Record the media files under a directory as saved references",
        )
        _ = snapshot_parser.add_argument(
            "media_root",
            type=str,
            help="Directory containing media files",
            metavar="MEDIA_ROOT",
        )
        _ = snapshot_parser.add_argument(
            "project_file",
            type=str,
            help="Project JSON file to write references into",
            metavar="PROJECT_FILE",
        )
        _ = snapshot_parser.add_argument(
            "--no-recursive",
            action="store_true",
            help="Only record files directly inside MEDIA_ROOT",
        )
        ArgumentParser._add_verbosity(snapshot_parser)

        return parser

    @staticmethod
    def _add_verbosity(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed per-file information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command
        if command == "check":
            return ArgumentParser._process_check(parsed_args)
        if command == "snapshot":
            return ArgumentParser._process_snapshot(parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_check(parsed_args: argparse.Namespace) -> CheckArgs:
        project_path = Path(parsed_args.project_path)
        if not project_path.exists():
            logger.error("Project path does not exist: %s", project_path)
            sys.exit(1)

        return CheckArgs(
            command="check",
            project_path=project_path.resolve(),
            auto_resolve=parsed_args.auto_resolve,
            show_dialog=not parsed_args.no_dialog,
            remove_missing=parsed_args.remove_missing,
            show_report=parsed_args.report,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _process_snapshot(parsed_args: argparse.Namespace) -> SnapshotArgs:
        media_root = Path(parsed_args.media_root)
        if not media_root.is_dir():
            logger.error("Media root does not exist or is not a directory: %s", media_root)
            sys.exit(1)

        return SnapshotArgs(
            command="snapshot",
            media_root=media_root.resolve(),
            project_file=Path(parsed_args.project_file).resolve(),
            recursive=not parsed_args.no_recursive,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
