"""Tests for the project restore application service."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from mediarestore.application.services.restore_service import (
    ProjectRestoreRequest,
    ProjectRestoreService,
)
from mediarestore.features.restoration import ProjectFileError, RestorationPhase


def _media_file(path: Path, size: int = 16) -> tuple[Path, int]:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(b"m" * size)
    return path, int(os.stat(path).st_mtime * 1000)


def _reference(ref_id: str, path: Path, size: int, mtime: int | None) -> dict[str, object]:
    return {
        "id": ref_id,
        "originalPath": str(path),
        "name": path.name,
        "size": size,
        "lastModified": mtime,
        "isVideo": True,
    }


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project with one available, one moved and one deleted file."""

    present, present_mtime = _media_file(tmp_path / "media" / "present.mp4")
    _, moved_mtime = _media_file(tmp_path / "media" / "day1" / "moved.mp4")
    project_file = tmp_path / "project.json"
    document = {
        "mediaFiles": [
            _reference("p", present, 16, present_mtime),
            _reference("m", tmp_path / "media" / "moved.mp4", 16, moved_mtime),
            _reference("g", tmp_path / "media" / "gone.mp4", 16, None),
        ],
        "musicFiles": [],
    }
    _ = project_file.write_text(json.dumps(document), encoding="utf-8")
    return project_file


def test_check_classifies_and_cancels_resolution(project: Path) -> None:
    service = ProjectRestoreService()

    reports = service.run(ProjectRestoreRequest(project_file=project))

    assert len(reports) == 1
    report = reports[0]
    stats = report.result.stats
    assert (stats.total, stats.restored, stats.relocated, stats.missing) == (3, 1, 1, 1)
    assert report.needs_user_input is True
    assert report.unresolved == 1
    assert report.report.startswith("Media restoration report")
    assert service.controller.state.phase is RestorationPhase.COMPLETED


def test_remove_missing_settles_every_missing_file(project: Path) -> None:
    service = ProjectRestoreService()

    report = service.run(ProjectRestoreRequest(project_file=project, remove_missing=True))[0]

    assert [ref.id for ref in report.resolution.removed_files] == ["g"]
    assert report.unresolved == 0


def test_no_dialog_leaves_missing_unresolved(project: Path) -> None:
    report = ProjectRestoreService().run(
        ProjectRestoreRequest(project_file=project, show_dialog=False, remove_missing=True)
    )[0]

    assert report.needs_user_input is False
    assert report.resolution.removed_files == []
    assert report.unresolved == 1


def test_auto_resolve_moves_missing_to_auto_resolved(project: Path) -> None:
    report = ProjectRestoreService().run(
        ProjectRestoreRequest(project_file=project, auto_resolve=True)
    )[0]

    assert report.needs_user_input is False
    assert [ref.id for ref in report.result.auto_resolved] == ["g"]
    assert report.unresolved == 0


def test_directory_checks_every_project_file(project: Path, tmp_path: Path) -> None:
    second = tmp_path / "second.json"
    _ = second.write_text(json.dumps({"mediaFiles": []}), encoding="utf-8")

    reports = ProjectRestoreService().run(ProjectRestoreRequest(project_file=tmp_path))

    assert [r.project_file for r in reports] == [project, second]
    assert reports[1].result.stats.total == 0


def test_directory_skips_unusable_project_files(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    good = tmp_path / "a_good.json"
    _ = good.write_text(json.dumps({"mediaFiles": []}), encoding="utf-8")
    _ = (tmp_path / "b_other.json").write_text("[1, 2, 3]", encoding="utf-8")
    _ = (tmp_path / "c_truncated.json").write_text('{"mediaFiles": [', encoding="utf-8")
    logger = logging.getLogger("mediarestore.tests.restore_service")

    with caplog.at_level(logging.WARNING, logger=logger.name):
        reports = ProjectRestoreService(logger=logger).run(
            ProjectRestoreRequest(project_file=tmp_path)
        )

    assert [r.project_file for r in reports] == [good]
    assert "b_other.json" in caplog.text
    assert "c_truncated.json" in caplog.text


def test_invalid_project_file_raises(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    _ = broken.write_text("{", encoding="utf-8")

    with pytest.raises(ProjectFileError):
        _ = ProjectRestoreService().run(ProjectRestoreRequest(project_file=broken))
