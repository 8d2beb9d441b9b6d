"""
Summary: Reconcile a project's saved media references against the live filesystem.
Why: One pass classifies every reference so a single failing file cannot block the rest.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from logging import Logger, getLogger
from pathlib import Path

from mediarestore.config.settings import BATCH_SIZE, SEARCH_MAX_DEPTH

from ..domain.models import (
    CorruptedFile,
    MediaAsset,
    MediaStatus,
    RelocatedFile,
    RestorationResult,
    RestorationStats,
    RestoreOptions,
    SavedMediaReference,
    ValidationResult,
)
from ..domain.path_resolver import project_directory, resolve_relative
from ..domain.references import from_saved, mark_checked
from .candidate_search import CandidateSearch
from .integrity import IntegrityValidator
from .ports import FilesystemProbe


@dataclass(slots=True)
class _Classification:
    """Per-reference outcome before aggregation."""

    reference: SavedMediaReference
    status: MediaStatus
    path: Path
    validation: ValidationResult | None = None
    new_path: Path | None = None
    issues: list[str] = field(default_factory=list)


class RestorationOrchestrator:
    """Drive validation and candidate search for a whole project."""

    _probe: FilesystemProbe
    _validator: IntegrityValidator
    _search: CandidateSearch
    _logger: Logger

    def __init__(
        self,
        probe: FilesystemProbe,
        *,
        validator: IntegrityValidator | None = None,
        search: CandidateSearch | None = None,
        batch_size: int = BATCH_SIZE,
        search_depth: int = SEARCH_MAX_DEPTH,
        logger: Logger | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive; received {batch_size}")
        self._probe = probe
        self._logger = logger or getLogger(__name__)
        self._validator = validator or IntegrityValidator(probe, logger=self._logger)
        self._search = search or CandidateSearch(probe, max_depth=search_depth, logger=self._logger)
        self.batch_size = batch_size

    async def restore(
        self,
        media_refs: Sequence[SavedMediaReference],
        music_refs: Sequence[SavedMediaReference],
        project_file_path: Path | str,
        options: RestoreOptions | None = None,
    ) -> RestorationResult:
        """Classify every reference and aggregate the outcome.

        Raises:
            ProjectPathError: When the project directory cannot be resolved.
        """

        opts = options or RestoreOptions()
        project_dir = project_directory(project_file_path)
        started = time.perf_counter()

        entries: list[tuple[SavedMediaReference, bool]] = [
            *((ref, False) for ref in media_refs),
            *((ref, True) for ref in music_refs),
        ]
        self._logger.info(
            "Restoring %d media reference(s) for %s",
            len(entries),
            project_dir,
            extra={
                "restoration_event": "restoration.pass.start",
                "total": len(entries),
                "project_dir": str(project_dir),
            },
        )

        classifications: list[_Classification] = []
        for start in range(0, len(entries), self.batch_size):
            batch = entries[start : start + self.batch_size]
            classifications.extend(
                await asyncio.gather(
                    *(
                        self._classify_safely(ref, project_file_path, project_dir)
                        for ref, _ in batch
                    )
                )
            )

        result = RestorationResult(stats=RestorationStats(total=len(entries)))
        for (_, is_music), outcome in zip(entries, classifications):
            self._collect(result, outcome, is_music=is_music, auto_resolve=opts.auto_resolve)
            self._log_classification(outcome, project_dir)

        stats = result.stats
        self._logger.info(
            "Restoration finished: %d restored, %d relocated, %d missing, %d corrupted",
            stats.restored,
            stats.relocated,
            stats.missing,
            stats.corrupted,
            extra={
                "restoration_event": "restoration.pass.complete",
                "restored": stats.restored,
                "relocated": stats.relocated,
                "missing": stats.missing,
                "corrupted": stats.corrupted,
                "duration_seconds": time.perf_counter() - started,
                "project_dir": str(project_dir),
            },
        )
        return result

    async def _classify_safely(
        self,
        reference: SavedMediaReference,
        project_file_path: Path | str,
        project_dir: Path,
    ) -> _Classification:
        try:
            return await self._classify(reference, project_file_path, project_dir)
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            self._logger.warning("Could not check %s: %s", reference.original_path, message)
            return _Classification(
                reference=reference,
                status=MediaStatus.MISSING,
                path=reference.original_path,
                issues=[message],
            )

    async def _classify(
        self,
        reference: SavedMediaReference,
        project_file_path: Path | str,
        project_dir: Path,
    ) -> _Classification:
        relative_candidate = self._relative_candidate(reference, project_file_path)
        resolved = reference.original_path
        if relative_candidate is not None and await self._probe.exists(relative_candidate):
            resolved = relative_candidate

        validation = await self._validator.validate(resolved, reference)
        if validation.is_valid:
            return _Classification(reference, MediaStatus.AVAILABLE, resolved, validation)
        if validation.file_exists:
            return _Classification(
                reference,
                MediaStatus.CORRUPTED,
                resolved,
                validation,
                issues=list(validation.issues),
            )

        roots = [resolved.parent]
        if relative_candidate is not None:
            roots.append(relative_candidate.parent)
        roots.append(project_dir)
        best = await self._best_candidate(reference, resolved, list(dict.fromkeys(roots)))
        if best is not None:
            new_path, candidate_validation = best
            return _Classification(
                reference,
                MediaStatus.RELOCATED,
                resolved,
                candidate_validation,
                new_path=new_path,
            )
        return _Classification(
            reference,
            MediaStatus.MISSING,
            resolved,
            validation,
            issues=list(validation.issues),
        )

    def _relative_candidate(
        self, reference: SavedMediaReference, project_file_path: Path | str
    ) -> Path | None:
        if not reference.relative_path:
            return None
        candidate = resolve_relative(reference.relative_path, project_file_path)
        if candidate is None:
            self._logger.debug(
                "Ignoring relative path outside the project for %s: %s",
                reference.name,
                reference.relative_path,
            )
        return candidate

    async def _best_candidate(
        self,
        reference: SavedMediaReference,
        resolved: Path,
        roots: list[Path],
    ) -> tuple[Path, ValidationResult] | None:
        """Search each root in turn and keep the highest-confidence valid match."""

        seen: set[Path] = {resolved}
        filename = reference.original_path.name
        for root in roots:
            best: tuple[Path, ValidationResult] | None = None
            for candidate in await self._search.find_candidates(root, filename):
                if candidate in seen:
                    continue
                seen.add(candidate)
                validation = await self._validator.validate(candidate, reference)
                if not validation.is_valid:
                    continue
                if best is None or validation.confidence > best[1].confidence:
                    best = (candidate, validation)
            if best is not None:
                return best
        return None

    @staticmethod
    def _collect(
        result: RestorationResult,
        outcome: _Classification,
        *,
        is_music: bool,
        auto_resolve: bool,
    ) -> None:
        stats = result.stats
        checked = mark_checked(outcome.reference, outcome.status)
        confidence = outcome.validation.confidence if outcome.validation else 0.0

        if outcome.status is MediaStatus.AVAILABLE:
            asset: MediaAsset = from_saved(checked)
            asset.path = outcome.path
            (result.restored_music if is_music else result.restored_media).append(asset)
            stats.restored += 1
        elif outcome.status is MediaStatus.RELOCATED:
            assert outcome.new_path is not None
            result.relocated_files.append(
                RelocatedFile(
                    original=checked,
                    new_path=outcome.new_path,
                    confidence=confidence,
                    asset=from_saved(checked, outcome.new_path),
                )
            )
            stats.relocated += 1
        elif outcome.status is MediaStatus.CORRUPTED:
            result.corrupted_files.append(
                CorruptedFile(
                    reference=checked,
                    path=outcome.path,
                    confidence=confidence,
                    issues=list(outcome.issues),
                )
            )
            stats.corrupted += 1
        else:
            (result.auto_resolved if auto_resolve else result.missing_files).append(checked)
            stats.missing += 1

    def _log_classification(self, outcome: _Classification, project_dir: Path) -> None:
        event = f"restoration.file.{outcome.status.value}"
        extra = {
            "restoration_event": event,
            "source_path": str(outcome.path),
            "target_path": str(outcome.new_path) if outcome.new_path else None,
            "confidence": outcome.validation.confidence if outcome.validation else None,
            "issues": list(outcome.issues),
            "project_dir": str(project_dir),
        }
        if outcome.status is MediaStatus.AVAILABLE:
            self._logger.debug("Available: %s", outcome.path, extra=extra)
        elif outcome.status is MediaStatus.RELOCATED:
            self._logger.info("Relocated: %s → %s", outcome.path, outcome.new_path, extra=extra)
        else:
            self._logger.warning(
                "%s: %s", outcome.status.value.capitalize(), outcome.path, extra=extra
            )

    @staticmethod
    def generate_report(result: RestorationResult) -> str:
        """Render a plain-text summary of ``result``."""

        stats = result.stats
        lines = [
            "Media restoration report",
            f"Total files: {stats.total}",
            f"Restored: {stats.restored}",
            f"Relocated: {stats.relocated}",
            f"Missing: {stats.missing}",
            f"Corrupted: {stats.corrupted}",
        ]
        if result.relocated_files:
            lines.append("")
            lines.append("Relocated files:")
            lines.extend(
                f"  - {item.original.name}: {item.original.original_path} -> {item.new_path}"
                for item in result.relocated_files
            )
        missing = [*result.missing_files, *result.auto_resolved]
        if missing:
            lines.append("")
            lines.append("Missing files:")
            lines.extend(f"  - {ref.name} ({ref.original_path})" for ref in missing)
        if result.corrupted_files:
            lines.append("")
            lines.append("Corrupted files:")
            lines.extend(
                f"  - {item.reference.name}: {'; '.join(item.issues) or 'integrity check failed'}"
                for item in result.corrupted_files
            )
        return "\n".join(lines)


def generate_report(result: RestorationResult) -> str:
    """Module-level alias of :meth:`RestorationOrchestrator.generate_report`."""

    return RestorationOrchestrator.generate_report(result)


__all__ = ["RestorationOrchestrator", "generate_report"]
