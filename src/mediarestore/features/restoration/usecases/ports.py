"""
Summary: Ports for the restoration feature.
Why: Keep filesystem and project-file access swappable behind narrow contracts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..domain.models import FileStats, MusicMetadata, SavedMediaReference, SavedMusicReference


class FilesystemProbe(Protocol):
    """Asynchronous, fail-closed view of the filesystem.

    Implementations must never raise for ordinary failures: errors surface as
    ``False``, ``None``, or an empty list.
    """

    async def exists(self, path: Path) -> bool:
        """Return True if ``path`` exists."""

        ...

    async def stat(self, path: Path) -> FileStats | None:
        """Return size and modification time (epoch ms), or ``None`` if unavailable."""

        ...

    async def search_by_name(self, root: Path, filename: str, max_depth: int) -> list[Path]:
        """Return files named ``filename`` at most ``max_depth`` levels below ``root``."""

        ...

    async def list_json_files(self, directory: Path) -> list[Path]:
        """Return JSON files directly inside ``directory``."""

        ...


class MusicTagReader(Protocol):
    """Read tag metadata from an audio file."""

    def read(self, path: Path) -> MusicMetadata | None:
        ...


@dataclass(slots=True)
class ProjectMedia:
    """Saved references as stored in one project file."""

    media: list[SavedMediaReference] = field(default_factory=list)
    music: list[SavedMusicReference] = field(default_factory=list)


class ProjectReader(Protocol):
    """Load saved references from a project file."""

    def load(self, project_file: Path) -> ProjectMedia:
        ...


class ProjectWriter(Protocol):
    """Persist saved references into a project file."""

    def save(self, project_file: Path, project: ProjectMedia) -> None:
        ...


__all__ = [
    "FilesystemProbe",
    "MusicTagReader",
    "ProjectMedia",
    "ProjectReader",
    "ProjectWriter",
]
