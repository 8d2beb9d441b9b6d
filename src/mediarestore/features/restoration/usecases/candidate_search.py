"""
Summary: Bounded-depth search for files that share a missing reference's name.
Why: Moved files usually stay near their old location; a depth cap keeps cost predictable.
"""

from __future__ import annotations

from logging import Logger, getLogger
from pathlib import Path

from mediarestore.config.settings import SEARCH_MAX_DEPTH

from .ports import FilesystemProbe


class CandidateSearch:
    """Find name matches under a root; ranking is left to the caller."""

    _probe: FilesystemProbe
    _logger: Logger

    def __init__(
        self,
        probe: FilesystemProbe,
        *,
        max_depth: int = SEARCH_MAX_DEPTH,
        logger: Logger | None = None,
    ) -> None:
        self._probe = probe
        self.max_depth = max(0, max_depth)
        self._logger = logger or getLogger(__name__)

    async def find_candidates(
        self,
        search_root: Path,
        filename: str,
        max_depth: int | None = None,
    ) -> list[Path]:
        """Return sorted, de-duplicated paths named ``filename`` under ``search_root``.

        ``max_depth`` may lower the configured depth but never raise it.
        """

        depth = self.max_depth if max_depth is None else min(max(0, max_depth), self.max_depth)
        if not filename:
            return []
        try:
            found = await self._probe.search_by_name(search_root, filename, depth)
        except OSError as exc:
            self._logger.debug("Candidate search under %s failed: %s", search_root, exc)
            return []

        unique = {Path(path) for path in found if Path(path).name == filename}
        candidates = sorted(unique, key=lambda path: path.as_posix())
        self._logger.debug(
            "Found %d candidate(s) for %s under %s (depth %d)",
            len(candidates),
            filename,
            search_root,
            depth,
        )
        return candidates


__all__ = ["CandidateSearch"]
