"""Tests for the restoration result display."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console

from mediarestore.application.services.restore_service import ProjectRestoreReport
from mediarestore.features.restoration import (
    CorruptedFile,
    MediaAsset,
    RelocatedFile,
    ResolutionOutcome,
    RestorationResult,
    RestorationStats,
    SavedMediaReference,
)
from mediarestore.ui.cli.display import RestoreResultDisplay


def _reference(name: str) -> SavedMediaReference:
    return SavedMediaReference(id=name, original_path=Path(f"/old/{name}"), name=name, size=1)


def _render(report: ProjectRestoreReport, **kwargs: bool) -> str:
    buffer = StringIO()
    RestoreResultDisplay(Console(file=buffer, width=200)).show_report(report, **kwargs)
    return buffer.getvalue()


def _report(*, removed: bool = False) -> ProjectRestoreReport:
    moved = _reference("moved.mp4")
    bad = _reference("[bad].mp4")
    gone = _reference("gone.mp4")
    result = RestorationResult(
        relocated_files=[
            RelocatedFile(
                original=moved,
                new_path=Path("/old/sub/moved.mp4"),
                confidence=0.9,
                asset=MediaAsset(id="moved.mp4", name="moved.mp4", path=Path("/old/sub/moved.mp4")),
            )
        ],
        corrupted_files=[
            CorruptedFile(reference=bad, path=bad.original_path, confidence=0.5, issues=["Size mismatch"])
        ],
        missing_files=[gone],
        stats=RestorationStats(total=3, relocated=1, missing=1, corrupted=1),
    )
    resolution = ResolutionOutcome(removed_files=[gone]) if removed else ResolutionOutcome()
    return ProjectRestoreReport(
        project_file=Path("/old/project.json"),
        result=result,
        needs_user_input=True,
        resolution=resolution,
        report="Media restoration report\nTotal files: 3",
    )


def test_summary_lists_each_problem_file() -> None:
    output = _render(_report())

    assert "Media check: /old/project.json" in output
    assert "/old/moved.mp4 → /old/sub/moved.mp4 (0.90)" in output
    assert "/old/[bad].mp4: Size mismatch" in output
    assert "/old/gone.mp4" in output
    assert "1 missing file(s) need attention" in output
    assert "Media restoration report" not in output


def test_removed_files_and_text_report() -> None:
    output = _render(_report(removed=True), show_text_report=True)

    assert "Removed 1 missing file(s)" in output
    assert "need attention" not in output
    assert "Total files: 3" in output


def test_quiet_prints_nothing() -> None:
    assert _render(_report(), quiet=True) == ""
