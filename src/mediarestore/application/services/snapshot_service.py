"""Application service that records a folder of media as saved project references."""

from __future__ import annotations

from dataclasses import dataclass
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from mediarestore.features.restoration import MediaAsset
from mediarestore.features.restoration.adapters.project.json_project import JsonProjectStore
from mediarestore.features.restoration.adapters.tags.mutagen_reader import MutagenTagReader
from mediarestore.features.restoration.domain.references import (
    AUDIO_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    generate_file_id,
    to_saved_media,
    to_saved_music,
)
from mediarestore.features.restoration.usecases.ports import (
    MusicTagReader,
    ProjectMedia,
    ProjectWriter,
)


@dataclass(slots=True)
class SnapshotRequest:
    media_root: Path
    project_file: Path
    recursive: bool = True


@final
class SnapshotService:
    """Build saved references for every supported file under a directory.

    Audio files become music references; video and image files become media
    references. Other files are ignored.
    """

    _writer: ProjectWriter
    _tag_reader: MusicTagReader
    _logger: Logger

    def __init__(
        self,
        *,
        writer: ProjectWriter | None = None,
        tag_reader: MusicTagReader | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._writer = writer or JsonProjectStore()
        self._tag_reader = tag_reader or MutagenTagReader()
        self._logger = logger or getLogger(__name__)

    def build(self, request: SnapshotRequest) -> ProjectMedia:
        """Return saved references for ``request.media_root`` without writing anything."""

        pattern = "**/*" if request.recursive else "*"
        project = ProjectMedia()
        for path in sorted(request.media_root.glob(pattern)):
            if not path.is_file():
                continue
            extension = path.suffix.lstrip(".").lower()
            is_audio = extension in AUDIO_EXTENSIONS
            is_video = extension in VIDEO_EXTENSIONS
            is_image = extension in IMAGE_EXTENSIONS
            if not (is_audio or is_video or is_image):
                continue

            try:
                info = path.stat()
            except OSError as exc:
                self._logger.warning("Skipping %s: %s", path, exc)
                continue
            absolute = path.resolve()
            last_modified = int(info.st_mtime * 1000)
            asset = MediaAsset(
                id=generate_file_id(absolute, info.st_size, last_modified),
                name=path.name,
                path=absolute,
                is_video=is_video,
                is_audio=is_audio,
                is_image=is_image,
                size=info.st_size,
            )
            if is_audio:
                project.music.append(
                    to_saved_music(
                        asset,
                        request.project_file,
                        last_modified=last_modified,
                        tag_reader=self._tag_reader.read,
                    )
                )
            else:
                project.media.append(
                    to_saved_media(asset, request.project_file, last_modified=last_modified)
                )
        self._logger.info(
            "Recorded %d media and %d music file(s) from %s",
            len(project.media),
            len(project.music),
            request.media_root,
        )
        return project

    def run(self, request: SnapshotRequest) -> ProjectMedia:
        """Build references and write them into the project file."""

        project = self.build(request)
        self._writer.save(request.project_file, project)
        return project


__all__ = ["SnapshotRequest", "SnapshotService"]
