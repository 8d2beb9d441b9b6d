"""
Summary: Convert between absolute asset paths and project-relative POSIX paths.
Why: Keep projects portable when their folder is moved as a unit.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from .errors import ProjectPathError


def project_directory(project_file_path: Path | str | None) -> Path:
    """Return the normalized directory holding ``project_file_path``.

    Raises:
        ProjectPathError: When the path is empty or cannot be normalized.
    """

    if project_file_path is None or not str(project_file_path).strip():
        raise ProjectPathError("Project file path is empty")
    raw = str(project_file_path)
    if "\x00" in raw:
        raise ProjectPathError(f"Project file path contains a NUL byte: {raw!r}")
    try:
        absolute = Path(os.path.abspath(os.path.expanduser(raw)))
    except (OSError, ValueError) as exc:
        raise ProjectPathError(f"Cannot resolve project path {raw!r}: {exc}") from exc
    return absolute.parent


def to_relative(file_path: Path | str, project_file_path: Path | str | None) -> str | None:
    """Return ``file_path`` relative to the project directory, or ``None``.

    ``None`` is returned when the file is not a descendant of the project
    directory or when the project directory cannot be resolved.
    """

    if project_file_path is None:
        return None
    try:
        base = project_directory(project_file_path)
        target = Path(os.path.abspath(os.path.expanduser(str(file_path))))
        relative = target.relative_to(base)
    except (ProjectPathError, OSError, ValueError):
        return None
    if not relative.parts:
        return None
    return relative.as_posix()


def to_absolute(relative_path: str, project_file_path: Path | str) -> Path:
    """Join ``relative_path`` onto the project directory without touching the disk."""

    base = project_directory(project_file_path)
    joined = base.joinpath(*PurePosixPath(relative_path).parts)
    return Path(os.path.normpath(joined))


def resolve_relative(relative_path: str, project_file_path: Path | str) -> Path | None:
    """Return the project-relative location, or ``None`` if it escapes the project.

    Absolute values and ``..`` segments that climb above the project directory
    are rejected, so a stored ``relativePath`` can only point inside the project.
    """

    if PurePosixPath(relative_path).is_absolute() or os.path.isabs(relative_path):
        return None
    base = project_directory(project_file_path)
    candidate = to_absolute(relative_path, project_file_path)
    try:
        remainder = candidate.relative_to(base)
    except ValueError:
        return None
    if not remainder.parts:
        return None
    return candidate


__all__ = ["project_directory", "resolve_relative", "to_absolute", "to_relative"]
