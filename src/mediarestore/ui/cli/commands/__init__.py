"""CLI command implementations."""

from .check import CheckCommand
from .snapshot import SnapshotCommand

__all__ = ["CheckCommand", "SnapshotCommand"]
