"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class CheckArgs:
    """Command line arguments for the ``check`` subcommand."""

    command: Literal["check"]
    project_path: Path
    auto_resolve: bool
    show_dialog: bool
    remove_missing: bool
    show_report: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class SnapshotArgs:
    """Command line arguments for the ``snapshot`` subcommand."""

    command: Literal["snapshot"]
    media_root: Path
    project_file: Path
    recursive: bool
    verbose: bool
    quiet: bool


CLIArgs = CheckArgs | SnapshotArgs
