"""Command line argument handling."""

from .options import CheckArgs, CLIArgs, SnapshotArgs
from .parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "CheckArgs", "SnapshotArgs"]
