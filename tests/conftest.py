"""Shared pytest fixtures for mediarestore tests."""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

# Keep the first-run default config out of the working tree.
os.environ.setdefault(
    "MEDIARESTORE_CONFIG",
    str(Path(tempfile.mkdtemp(prefix="mediarestore-test-")) / "config.toml"),
)

from mediarestore.features.restoration import FileStats, SavedMediaReference  # noqa: E402


class FakeProbe:
    """In-memory filesystem probe with error injection and concurrency tracking."""

    def __init__(self, files: dict[Path, FileStats] | None = None) -> None:
        self.files: dict[Path, FileStats] = dict(files or {})
        self.failing: set[Path] = set()
        self.in_flight = 0
        self.max_in_flight = 0
        self.search_calls: list[tuple[Path, str, int]] = []

    def add(self, path: Path | str, size: int = 1024, last_modified: int = 1_700_000_000_000) -> Path:
        resolved = Path(path)
        self.files[resolved] = FileStats(size=size, last_modified=last_modified)
        return resolved

    def remove(self, path: Path | str) -> None:
        _ = self.files.pop(Path(path), None)

    async def _enter(self, path: Path) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1
        if path in self.failing:
            raise PermissionError(f"Permission denied: {path}")

    async def exists(self, path: Path) -> bool:
        await self._enter(path)
        return path in self.files

    async def stat(self, path: Path) -> FileStats | None:
        await self._enter(path)
        return self.files.get(path)

    async def search_by_name(self, root: Path, filename: str, max_depth: int) -> list[Path]:
        self.search_calls.append((root, filename, max_depth))
        await self._enter(root)
        matches: list[Path] = []
        for path in self.files:
            try:
                relative = path.relative_to(root)
            except ValueError:
                continue
            if path.name == filename and len(relative.parts) - 1 <= max_depth:
                matches.append(path)
        return sorted(matches)

    async def list_json_files(self, directory: Path) -> list[Path]:
        return sorted(p for p in self.files if p.parent == directory and p.suffix == ".json")


@pytest.fixture
def fake_probe() -> FakeProbe:
    """Provide an empty in-memory probe."""

    return FakeProbe()


@pytest.fixture
def make_reference() -> Callable[..., SavedMediaReference]:
    """Build saved media references with sensible defaults."""

    def _make(
        path: str | Path,
        *,
        size: int = 1024,
        last_modified: int | None = 1_700_000_000_000,
        relative_path: str | None = None,
        is_video: bool = True,
        ref_id: str | None = None,
    ) -> SavedMediaReference:
        original = Path(path)
        return SavedMediaReference(
            id=ref_id or f"id-{original.name}",
            original_path=original,
            name=original.name,
            size=size,
            last_modified=last_modified,
            is_video=is_video,
            is_audio=not is_video,
            metadata={"duration": 12.5, "probeData": {"streams": [], "format": {}}},
            relative_path=relative_path,
        )

    return _make
