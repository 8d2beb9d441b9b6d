"""Filesystem adapter for restoration use cases."""

from __future__ import annotations

import asyncio
import os
from collections import deque
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from logging import Logger, getLogger
from pathlib import Path
from typing import TypeVar

from mediarestore.config.settings import PROBE_TIMEOUT_SECONDS

from ...domain.models import FileStats
from ...usecases.ports import FilesystemProbe

T = TypeVar("T")

JSON_SUFFIXES: frozenset[str] = frozenset({".json"})
DEFAULT_MAX_WORKERS = 8


class LocalFilesystemProbe(FilesystemProbe):
    """Run blocking filesystem calls in worker threads with a per-call timeout.

    Every failure, including a timeout, collapses to the call's empty value.

    A timed-out call is abandoned, not interrupted: its worker thread keeps
    running until the OS call returns. Calls therefore run on a pool owned by
    the probe so a hung mount can exhaust at most ``max_workers`` threads and
    never the event loop's default executor. Call :meth:`close` when done.
    """

    _logger: Logger

    def __init__(
        self,
        *,
        timeout: float = PROBE_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        logger: Logger | None = None,
    ) -> None:
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="mediarestore-probe"
        )
        self._logger = logger or getLogger(__name__)

    def close(self) -> None:
        """Release idle workers without waiting for abandoned calls."""

        self._executor.shutdown(wait=False, cancel_futures=True)

    async def exists(self, path: Path) -> bool:
        return await self._run(path.exists, default=False, label=f"exists {path}")

    async def stat(self, path: Path) -> FileStats | None:
        return await self._run(lambda: self._stat_sync(path), default=None, label=f"stat {path}")

    async def search_by_name(self, root: Path, filename: str, max_depth: int) -> list[Path]:
        return await self._run(
            lambda: self._search_sync(root, filename, max_depth),
            default=[],
            label=f"search {filename} under {root}",
        )

    async def list_json_files(self, directory: Path) -> list[Path]:
        return await self._run(
            lambda: self._list_json_sync(directory),
            default=[],
            label=f"list {directory}",
        )

    async def _run(self, func: Callable[[], T], *, default: T, label: str) -> T:
        try:
            loop = asyncio.get_running_loop()
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, func), timeout=self.timeout
            )
        except TimeoutError:
            self._logger.debug("Filesystem call timed out after %.1fs: %s", self.timeout, label)
        except (OSError, ValueError, RuntimeError) as exc:
            self._logger.debug("Filesystem call failed (%s): %s", label, exc)
        return default

    @staticmethod
    def _stat_sync(path: Path) -> FileStats | None:
        info = path.stat()
        if not path.is_file():
            return None
        return FileStats(size=info.st_size, last_modified=int(info.st_mtime * 1000))

    @staticmethod
    def _search_sync(root: Path, filename: str, max_depth: int) -> list[Path]:
        """Breadth-first walk that never descends below ``max_depth`` levels."""

        matches: list[Path] = []
        pending: deque[tuple[Path, int]] = deque([(root, 0)])
        visited: set[Path] = set()

        while pending:
            current, depth = pending.popleft()
            if current in visited:
                continue
            visited.add(current)
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        try:
                            if entry.is_file() and entry.name == filename:
                                matches.append(Path(entry.path))
                            elif (
                                entry.is_dir(follow_symlinks=False)
                                and depth < max_depth
                                and not entry.name.startswith(".")
                            ):
                                pending.append((Path(entry.path), depth + 1))
                        except OSError:
                            continue
            except OSError:
                continue

        matches.sort(key=lambda path: path.as_posix())
        return matches

    @staticmethod
    def _list_json_sync(directory: Path) -> list[Path]:
        return sorted(
            (
                entry
                for entry in directory.iterdir()
                if entry.suffix.lower() in JSON_SUFFIXES and entry.is_file()
            ),
            key=lambda path: path.as_posix(),
        )


__all__ = ["DEFAULT_MAX_WORKERS", "JSON_SUFFIXES", "LocalFilesystemProbe"]
