"""JSON project-file adapter.

Where: features/restoration/adapters/project/json_project.py
What: Read and write the ``mediaFiles``/``musicFiles`` reference arrays of a project file.
Why: The restoration engine only borrows references; persistence stays in this adapter.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

from mediarestore.config.file_ops import write_text_file
from mediarestore.platform.logging import logger

from ...domain.errors import ProjectFileError
from ...domain.models import SavedMediaReference, SavedMusicReference
from ...usecases.ports import ProjectMedia, ProjectReader, ProjectWriter

MEDIA_KEY: Final[str] = "mediaFiles"
MUSIC_KEY: Final[str] = "musicFiles"
LIBRARY_KEY: Final[str] = "mediaLibrary"


class JsonProjectStore(ProjectReader, ProjectWriter):
    """Project files are JSON objects with reference arrays at the top level or under ``mediaLibrary``."""

    def load(self, project_file: Path) -> ProjectMedia:
        try:
            raw = project_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProjectFileError(f"Cannot read project file {project_file}: {exc}") from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProjectFileError(f"Project file {project_file} is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise ProjectFileError(f"Project file {project_file} must contain a JSON object")

        section: dict[str, Any] = document
        library = document.get(LIBRARY_KEY)
        if isinstance(library, dict):
            section = library

        media = [
            SavedMediaReference.from_dict(item)
            for item in self._entries(section, MEDIA_KEY, project_file)
        ]
        music = [
            SavedMusicReference.from_dict(item)
            for item in self._entries(section, MUSIC_KEY, project_file)
        ]
        logger.debug(
            "Loaded %d media and %d music reference(s) from %s",
            len(media),
            len(music),
            project_file,
        )
        return ProjectMedia(media=media, music=music)

    def save(self, project_file: Path, project: ProjectMedia) -> None:
        """Write the reference arrays, preserving any other keys already in the file."""

        document: dict[str, Any] = {}
        if project_file.exists():
            try:
                existing = json.loads(project_file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise ProjectFileError(f"Cannot update project file {project_file}: {exc}") from exc
            if isinstance(existing, dict):
                document = existing

        target = document
        if isinstance(document.get(LIBRARY_KEY), dict):
            target = document[LIBRARY_KEY]
        target[MEDIA_KEY] = [reference.to_dict() for reference in project.media]
        target[MUSIC_KEY] = [reference.to_dict() for reference in project.music]

        write_text_file(project_file, json.dumps(document, indent=2, ensure_ascii=False) + "\n")
        logger.info("Saved %d reference(s) to %s", len(project.media) + len(project.music), project_file)

    @staticmethod
    def _entries(section: dict[str, Any], key: str, project_file: Path) -> list[dict[str, Any]]:
        entries = section.get(key, [])
        if not isinstance(entries, list):
            raise ProjectFileError(f"'{key}' in {project_file} must be a list")
        valid: list[dict[str, Any]] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict) or not entry.get("originalPath"):
                raise ProjectFileError(
                    f"'{key}[{index}]' in {project_file} is not a saved media reference"
                )
            valid.append(entry)
        return valid


__all__ = ["JsonProjectStore", "LIBRARY_KEY", "MEDIA_KEY", "MUSIC_KEY"]
