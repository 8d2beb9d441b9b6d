"""Display helpers for the CLI."""

from .restore_result import RestoreResultDisplay

__all__ = ["RestoreResultDisplay"]
