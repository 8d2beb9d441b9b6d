"""Exceptions raised by the restoration feature."""

from __future__ import annotations


class RestorationError(Exception):
    """Base class for restoration failures."""


class ProjectPathError(RestorationError):
    """The project file path cannot be turned into a usable directory."""


class RestorationInProgressError(RestorationError):
    """A restoration pass is already running on this controller."""


class ProjectFileError(RestorationError):
    """A project file could not be read or has an unexpected shape."""


__all__ = [
    "ProjectFileError",
    "ProjectPathError",
    "RestorationError",
    "RestorationInProgressError",
]
