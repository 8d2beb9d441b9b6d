"""Mutagen-backed music tag reader.

Where: features/restoration/adapters/tags/mutagen_reader.py
What: Read artist/album/title/year/track/genre from audio files via mutagen easy tags.
Why: Fill ``musicMetadata`` at save time when the prober supplied no tags.
"""

from __future__ import annotations

from logging import Logger, getLogger
from pathlib import Path

import mutagen
from mutagen import MutagenError

from ...domain.models import MusicMetadata
from ...domain.references import parse_track, parse_year
from ...usecases.ports import MusicTagReader


def _first(tags: object, key: str) -> str | None:
    try:
        values = tags[key]  # pyright: ignore[reportIndexIssue]
    except (KeyError, TypeError, ValueError):
        return None
    if isinstance(values, (list, tuple)):
        values = values[0] if values else None
    if values is None:
        return None
    text = str(values).strip()
    return text or None


class MutagenTagReader(MusicTagReader):
    """Read easy tags from any format mutagen recognises."""

    _logger: Logger

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or getLogger(__name__)

    def read(self, path: Path) -> MusicMetadata | None:
        try:
            audio = mutagen.File(path, easy=True)  # pyright: ignore[reportPrivateImportUsage]
        except (MutagenError, OSError) as exc:
            self._logger.debug("Could not read tags from %s: %s", path, exc)
            return None
        if audio is None or audio.tags is None:
            return None

        tags = audio.tags
        return MusicMetadata(
            artist=_first(tags, "artist"),
            album=_first(tags, "album"),
            title=_first(tags, "title"),
            year=parse_year(_first(tags, "date") or ""),
            track=parse_track(_first(tags, "tracknumber") or ""),
            genre=_first(tags, "genre"),
        )

    __call__ = read


__all__ = ["MutagenTagReader"]
