"""Where: src/mediarestore/features/restoration/domain/references.py
What: Convert between in-memory assets and saved references; derive stable ids.
Why: Saving and restoring must agree on ids, relative paths, and metadata layout.
"""

from __future__ import annotations

import hashlib
import random
import string
import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Final

from mediarestore.platform.logging import logger

from .models import (
    MediaAsset,
    MediaStatus,
    MusicMetadata,
    SavedMediaReference,
    SavedMusicReference,
)
from .path_resolver import to_relative

ID_LENGTH: Final[int] = 16

VIDEO_EXTENSIONS: Final[tuple[str, ...]] = (
    "mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "3gp",
)
AUDIO_EXTENSIONS: Final[tuple[str, ...]] = (
    "mp3", "wav", "ogg", "flac", "aac", "m4a", "wma", "opus",
)
IMAGE_EXTENSIONS: Final[tuple[str, ...]] = (
    "jpg", "jpeg", "png", "gif", "bmp", "webp", "tiff", "svg",
)


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_file_id(path: Path | str, size: int | None, last_modified: int | None) -> str:
    """Derive a reproducible id from path, size, and modification time.

    Falls back to a randomized ``file_<ms>_<suffix>`` id if derivation fails.
    """

    try:
        seed = f"{path}_{size}_{last_modified}".encode("utf-8")
        return hashlib.sha1(seed).hexdigest()[:ID_LENGTH]
    except (UnicodeEncodeError, ValueError) as exc:
        logger.debug("Falling back to random id for %s: %s", path, exc)
        suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
        return f"file_{now_ms()}_{suffix}"


def _saved_metadata(asset: MediaAsset) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    if asset.duration is not None:
        metadata["duration"] = asset.duration
    if asset.start_time is not None:
        metadata["startTime"] = asset.start_time
    if asset.created_at is not None:
        metadata["createdAt"] = asset.created_at
    if asset.probe_data is not None:
        metadata["probeData"] = asset.probe_data
    return metadata


def to_saved_media(
    asset: MediaAsset,
    project_file_path: Path | str | None = None,
    *,
    last_modified: int | None = None,
) -> SavedMediaReference:
    """Serialize an in-memory asset into a saved media reference."""

    return SavedMediaReference(
        id=asset.id or generate_file_id(asset.path, asset.size, last_modified),
        original_path=asset.path,
        relative_path=to_relative(asset.path, project_file_path),
        name=asset.name,
        size=asset.size or 0,
        last_modified=last_modified,
        is_video=asset.is_video,
        is_audio=asset.is_audio,
        is_image=asset.is_image,
        metadata=_saved_metadata(asset),
        status=MediaStatus.AVAILABLE,
        last_checked=now_ms(),
    )


def to_saved_music(
    asset: MediaAsset,
    project_file_path: Path | str | None = None,
    *,
    last_modified: int | None = None,
    tag_reader: Callable[[Path], MusicMetadata | None] | None = None,
) -> SavedMusicReference:
    """Serialize a music asset, extracting tag metadata once."""

    base = to_saved_media(asset, project_file_path, last_modified=last_modified)
    music = extract_music_metadata(asset.probe_data)
    if music is None and tag_reader is not None:
        music = tag_reader(asset.path)
    return SavedMusicReference(
        id=base.id,
        original_path=base.original_path,
        relative_path=base.relative_path,
        name=base.name,
        size=base.size,
        last_modified=base.last_modified,
        is_video=base.is_video,
        is_audio=base.is_audio,
        is_image=base.is_image,
        metadata=base.metadata,
        status=base.status,
        last_checked=base.last_checked,
        music_metadata=music,
    )


def extract_music_metadata(probe_data: dict[str, Any] | None) -> MusicMetadata | None:
    """Read artist/album/title/year/track/genre from ``probeData.format.tags``."""

    if not isinstance(probe_data, dict):
        return None
    format_section = probe_data.get("format")
    if not isinstance(format_section, dict):
        return None
    tags = format_section.get("tags")
    if not isinstance(tags, dict) or not tags:
        return None

    lowered = {str(key).lower(): value for key, value in tags.items()}
    return MusicMetadata(
        artist=_text(lowered.get("artist")),
        album=_text(lowered.get("album")),
        title=_text(lowered.get("title")),
        year=parse_year(_text(lowered.get("date")) or _text(lowered.get("year")) or ""),
        track=parse_track(_text(lowered.get("track")) or ""),
        genre=_text(lowered.get("genre")),
    )


def parse_year(date_str: str) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    return int(date_str[:4]) if len(date_str) >= 4 and date_str[:4].isdigit() else None


def parse_track(value: str) -> int | None:
    """Parse ``"3"`` or ``"3/12"`` into the track number."""
    head = value.split("/", 1)[0].strip()
    return int(head) if head.isdigit() else None


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def from_saved(reference: SavedMediaReference, path: Path | None = None) -> MediaAsset:
    """Promote a saved reference into the in-memory asset shape.

    Args:
        reference: Saved reference to convert.
        path: Live path to use instead of ``reference.original_path``.
    """

    metadata = reference.metadata
    probe_data = metadata.get("probeData")
    live_path = path or reference.original_path
    return MediaAsset(
        id=reference.id,
        name=live_path.name if path is not None else reference.name,
        path=live_path,
        is_video=reference.is_video,
        is_audio=reference.is_audio,
        is_image=reference.is_image,
        size=reference.size,
        duration=metadata.get("duration"),
        start_time=metadata.get("startTime"),
        created_at=metadata.get("createdAt"),
        probe_data=probe_data if isinstance(probe_data, dict) else None,
        is_loading_metadata=False,
        last_checked_at=now_ms(),
    )


def extensions_for_reference(reference: SavedMediaReference) -> tuple[str, ...]:
    """Return the extensions a replacement file for ``reference`` may plausibly have."""

    if reference.is_video:
        return VIDEO_EXTENSIONS
    if reference.is_audio:
        return AUDIO_EXTENSIONS
    if reference.is_image:
        return IMAGE_EXTENSIONS
    suffix = Path(reference.name).suffix.lstrip(".").lower()
    return (suffix,) if suffix else ()


def mark_checked(reference: SavedMediaReference, status: MediaStatus) -> SavedMediaReference:
    """Return a copy of ``reference`` with ``status`` and ``last_checked`` updated."""

    return replace(reference, status=status, last_checked=now_ms())


__all__ = [
    "AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "extensions_for_reference",
    "extract_music_metadata",
    "from_saved",
    "generate_file_id",
    "mark_checked",
    "now_ms",
    "parse_track",
    "parse_year",
    "to_saved_media",
    "to_saved_music",
]
