"""Data structures describing saved media references and restoration outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal


ReferenceKind = Literal["media", "music"]


class MediaStatus(str, Enum):
    """Classification assigned to a saved reference by a restoration pass."""

    UNKNOWN = "unknown"
    AVAILABLE = "available"
    MISSING = "missing"
    RELOCATED = "relocated"
    CORRUPTED = "corrupted"

    @staticmethod
    def parse(value: object) -> "MediaStatus":
        """Translate a persisted status string, treating unknown values as ``UNKNOWN``."""

        if isinstance(value, MediaStatus):
            return value
        normalized = str(value or "").strip().lower()
        for status in MediaStatus:
            if status.value == normalized:
                return status
        return MediaStatus.UNKNOWN


@dataclass(slots=True, frozen=True)
class MusicMetadata:
    """Tag fields captured once when a music reference is saved."""

    artist: str | None = None
    album: str | None = None
    title: str | None = None
    year: int | None = None
    track: int | None = None
    genre: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "artist": self.artist,
            "album": self.album,
            "title": self.title,
            "year": self.year,
            "track": self.track,
            "genre": self.genre,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MusicMetadata":
        return cls(
            artist=data.get("artist"),
            album=data.get("album"),
            title=data.get("title"),
            year=_optional_int(data.get("year")),
            track=_optional_int(data.get("track")),
            genre=data.get("genre"),
        )


@dataclass(slots=True, frozen=True)
class SavedMediaReference:
    """Persisted record of one external media asset.

    ``metadata`` is an opaque payload (duration, probe data, start time) that is
    copied through unchanged. ``original_path`` is absolute; ``relative_path`` is
    a POSIX path relative to the project file's directory when the asset lived
    under the project tree at save time.
    """

    id: str
    original_path: Path
    name: str
    size: int
    last_modified: int | None = None
    is_video: bool = False
    is_audio: bool = False
    is_image: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    status: MediaStatus = MediaStatus.UNKNOWN
    last_checked: int = 0
    relative_path: str | None = None

    @property
    def kind(self) -> ReferenceKind:
        return "media"

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the camelCase shape stored in project files."""

        data: dict[str, Any] = {
            "id": self.id,
            "originalPath": str(self.original_path),
            "name": self.name,
            "size": self.size,
            "lastModified": self.last_modified,
            "isVideo": self.is_video,
            "isAudio": self.is_audio,
            "isImage": self.is_image,
            "metadata": dict(self.metadata),
            "status": self.status.value,
            "lastChecked": self.last_checked,
        }
        if self.relative_path is not None:
            data["relativePath"] = self.relative_path
        return data

    @classmethod
    def _fields_from_dict(cls, data: dict[str, Any]) -> dict[str, Any]:
        original_path = data.get("originalPath")
        if not original_path:
            raise ValueError("Saved reference is missing 'originalPath'")
        path = Path(str(original_path))
        metadata = data.get("metadata")
        return {
            "id": str(data.get("id") or ""),
            "original_path": path,
            "name": str(data.get("name") or path.name),
            "size": _optional_int(data.get("size")) or 0,
            "last_modified": _optional_int(data.get("lastModified")),
            "is_video": bool(data.get("isVideo", False)),
            "is_audio": bool(data.get("isAudio", False)),
            "is_image": bool(data.get("isImage", False)),
            "metadata": dict(metadata) if isinstance(metadata, dict) else {},
            "status": MediaStatus.parse(data.get("status")),
            "last_checked": _optional_int(data.get("lastChecked")) or 0,
            "relative_path": data.get("relativePath") or None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedMediaReference":
        """Build a reference from its project-file representation."""

        return cls(**cls._fields_from_dict(data))


@dataclass(slots=True, frozen=True)
class SavedMusicReference(SavedMediaReference):
    """Saved reference for a music track with tag metadata captured at save time."""

    music_metadata: MusicMetadata | None = None

    @property
    def kind(self) -> ReferenceKind:
        return "music"

    def to_dict(self) -> dict[str, Any]:
        data = SavedMediaReference.to_dict(self)
        if self.music_metadata is not None:
            data["musicMetadata"] = self.music_metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedMusicReference":
        fields_ = cls._fields_from_dict(data)
        raw_music = data.get("musicMetadata")
        music = MusicMetadata.from_dict(raw_music) if isinstance(raw_music, dict) else None
        return cls(**fields_, music_metadata=music)


@dataclass(slots=True)
class MediaAsset:
    """In-memory asset shape consumed by the rest of the application."""

    id: str
    name: str
    path: Path
    is_video: bool = False
    is_audio: bool = False
    is_image: bool = False
    size: int | None = None
    duration: float | None = None
    start_time: float | None = None
    created_at: str | None = None
    probe_data: dict[str, Any] | None = None
    is_loading_metadata: bool = False
    last_checked_at: int | None = None


@dataclass(slots=True, frozen=True)
class FileStats:
    """Lightweight file attributes; ``last_modified`` is epoch milliseconds."""

    size: int
    last_modified: int


@dataclass(slots=True)
class ValidationResult:
    """Outcome of comparing a live file with a saved reference."""

    is_valid: bool
    confidence: float
    issues: list[str] = field(default_factory=list)
    file_exists: bool = True


@dataclass(slots=True)
class RelocatedFile:
    """A reference whose file was found at a new path."""

    original: SavedMediaReference
    new_path: Path
    confidence: float
    asset: MediaAsset


@dataclass(slots=True)
class CorruptedFile:
    """A reference whose file exists but failed the integrity check."""

    reference: SavedMediaReference
    path: Path
    confidence: float
    issues: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RestorationStats:
    total: int = 0
    restored: int = 0
    missing: int = 0
    relocated: int = 0
    corrupted: int = 0


@dataclass(slots=True)
class RestorationResult:
    """Aggregate output of one restoration pass.

    Every input reference lands in exactly one of ``restored_media``/``restored_music``,
    ``relocated_files``, ``corrupted_files``, or ``missing_files``/``auto_resolved``.
    """

    restored_media: list[MediaAsset] = field(default_factory=list)
    restored_music: list[MediaAsset] = field(default_factory=list)
    missing_files: list[SavedMediaReference] = field(default_factory=list)
    relocated_files: list[RelocatedFile] = field(default_factory=list)
    corrupted_files: list[CorruptedFile] = field(default_factory=list)
    auto_resolved: list[SavedMediaReference] = field(default_factory=list)
    stats: RestorationStats = field(default_factory=RestorationStats)

    def usable_assets(self) -> list[MediaAsset]:
        """Return every asset the application can load, relocated ones included."""

        return [
            *self.restored_media,
            *self.restored_music,
            *(relocated.asset for relocated in self.relocated_files),
        ]


@dataclass(slots=True, frozen=True)
class RestoreOptions:
    """Per-pass switches.

    ``auto_resolve`` drops unresolved files instead of surfacing them;
    ``show_dialog`` tells the caller a human-resolution round is expected.
    """

    auto_resolve: bool = False
    show_dialog: bool = True


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return None


__all__ = [
    "CorruptedFile",
    "FileStats",
    "MediaAsset",
    "MediaStatus",
    "MusicMetadata",
    "ReferenceKind",
    "RelocatedFile",
    "RestorationResult",
    "RestorationStats",
    "RestoreOptions",
    "SavedMediaReference",
    "SavedMusicReference",
    "ValidationResult",
]
