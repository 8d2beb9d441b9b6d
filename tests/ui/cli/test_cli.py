"""Tests for CLI functionality."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from mediarestore.features.restoration import ProjectPathError
from mediarestore.ui.cli.cli import (
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_UNRESOLVED,
    CommandProcessor,
    main,
)


@pytest.fixture(autouse=True)
def mock_setup_logger(mocker: MockerFixture) -> MagicMock:
    """Keep CLI runs from attaching a real log file."""

    return mocker.patch("mediarestore.ui.cli.args.parser.setup_logger")


def _project(tmp_path: Path, *, with_missing: bool) -> Path:
    clip = tmp_path / "clip.mp4"
    _ = clip.write_bytes(b"c" * 4)
    entries = [
        {"id": "c", "originalPath": str(clip), "name": "clip.mp4", "size": 4, "isVideo": True}
    ]
    if with_missing:
        entries.append(
            {
                "id": "g",
                "originalPath": str(tmp_path / "gone.mp4"),
                "name": "gone.mp4",
                "size": 4,
                "isVideo": True,
            }
        )
    project = tmp_path / "project.json"
    _ = project.write_text(json.dumps({"mediaFiles": entries}), encoding="utf-8")
    return project


def test_check_all_available_exits_cleanly(tmp_path: Path) -> None:
    project = _project(tmp_path, with_missing=False)

    CommandProcessor.process_command(["check", str(project), "--quiet"])


def test_check_with_unresolved_missing_files(tmp_path: Path) -> None:
    project = _project(tmp_path, with_missing=True)

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["check", str(project), "--quiet"])

    assert exc_info.value.code == EXIT_UNRESOLVED


@pytest.mark.parametrize("flag", ["--remove-missing", "--auto-resolve"])
def test_settled_missing_files_exit_cleanly(tmp_path: Path, flag: str) -> None:
    project = _project(tmp_path, with_missing=True)

    CommandProcessor.process_command(["check", str(project), flag, "--quiet"])


def test_check_prints_summary_and_report(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project = _project(tmp_path, with_missing=True)

    with pytest.raises(SystemExit):
        CommandProcessor.process_command(["check", str(project), "--report"])

    out = capsys.readouterr().out
    assert "Media check:" in out
    assert "Media restoration report" in out
    assert "gone.mp4" in out
    assert "--remove-missing" in out


def test_snapshot_then_check(tmp_path: Path) -> None:
    media = tmp_path / "media"
    media.mkdir()
    _ = (media / "a.mov").write_bytes(b"a")
    project = tmp_path / "project.json"

    CommandProcessor.process_command(["snapshot", str(media), str(project), "--quiet"])
    document = json.loads(project.read_text(encoding="utf-8"))
    assert [entry["name"] for entry in document["mediaFiles"]] == ["a.mov"]

    CommandProcessor.process_command(["check", str(project), "--quiet"])


def test_restoration_error_exits_with_error(tmp_path: Path, mocker: MockerFixture) -> None:
    project = _project(tmp_path, with_missing=False)
    _ = mocker.patch(
        "mediarestore.ui.cli.commands.check.ProjectRestoreService.run",
        side_effect=ProjectPathError("bad project path"),
    )

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["check", str(project)])

    assert exc_info.value.code == EXIT_ERROR


def test_keyboard_interrupt(tmp_path: Path, mocker: MockerFixture) -> None:
    project = _project(tmp_path, with_missing=False)
    _ = mocker.patch(
        "mediarestore.ui.cli.commands.check.ProjectRestoreService.run",
        side_effect=KeyboardInterrupt,
    )

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["check", str(project)])

    assert exc_info.value.code == EXIT_INTERRUPTED


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch.object(CommandProcessor, "process_command")

    assert main() == 0
    process.assert_called_once_with()
