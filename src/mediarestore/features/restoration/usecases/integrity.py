"""
Summary: Score how well a live file matches a saved reference.
Why: Attribute comparison (name, size, mtime) is fast enough for large video libraries.
"""

from __future__ import annotations

from logging import Logger, getLogger
from pathlib import Path

from mediarestore.config.settings import (
    NAME_MISMATCH_PENALTY,
    SIZE_MISMATCH_PENALTY,
    TIMESTAMP_MISMATCH_PENALTY,
    TIMESTAMP_TOLERANCE_MS,
    VALIDITY_THRESHOLD,
)

from ..domain.models import SavedMediaReference, ValidationResult
from .ports import FilesystemProbe

FILE_DOES_NOT_EXIST = "File does not exist"
STATS_UNAVAILABLE = "Unable to read file attributes"


class IntegrityValidator:
    """Compare live file attributes against a saved reference.

    Confidence starts at 1.0 and loses a fixed penalty per mismatching signal.
    File contents are never read.
    """

    _probe: FilesystemProbe
    _logger: Logger

    def __init__(
        self,
        probe: FilesystemProbe,
        *,
        threshold: float = VALIDITY_THRESHOLD,
        name_penalty: float = NAME_MISMATCH_PENALTY,
        size_penalty: float = SIZE_MISMATCH_PENALTY,
        timestamp_penalty: float = TIMESTAMP_MISMATCH_PENALTY,
        timestamp_tolerance_ms: int = TIMESTAMP_TOLERANCE_MS,
        logger: Logger | None = None,
    ) -> None:
        self._probe = probe
        self.threshold = threshold
        self.name_penalty = name_penalty
        self.size_penalty = size_penalty
        self.timestamp_penalty = timestamp_penalty
        self.timestamp_tolerance_ms = timestamp_tolerance_ms
        self._logger = logger or getLogger(__name__)

    async def validate(self, live_path: Path, reference: SavedMediaReference) -> ValidationResult:
        """Validate ``live_path`` against ``reference``."""

        if not await self._probe.exists(live_path):
            return ValidationResult(
                is_valid=False,
                confidence=0.0,
                issues=[FILE_DOES_NOT_EXIST],
                file_exists=False,
            )

        stats = await self._probe.stat(live_path)
        if stats is None:
            return ValidationResult(is_valid=False, confidence=0.0, issues=[STATS_UNAVAILABLE])

        confidence = 1.0
        issues: list[str] = []

        if live_path.name != reference.name:
            confidence -= self.name_penalty
            issues.append(f"Name mismatch: expected '{reference.name}', found '{live_path.name}'")

        if stats.size != reference.size:
            confidence -= self.size_penalty
            issues.append(
                f"Size mismatch: expected {reference.size} bytes, found {stats.size} bytes"
            )

        if reference.last_modified is not None:
            drift = abs(stats.last_modified - reference.last_modified)
            if drift > self.timestamp_tolerance_ms:
                confidence -= self.timestamp_penalty
                issues.append(
                    "Modification time mismatch: "
                    + f"expected {reference.last_modified}, found {stats.last_modified}"
                )

        confidence = round(min(1.0, max(0.0, confidence)), 6)
        is_valid = confidence >= self.threshold
        if issues:
            self._logger.debug(
                "Validation of %s scored %.2f: %s", live_path, confidence, "; ".join(issues)
            )
        return ValidationResult(is_valid=is_valid, confidence=confidence, issues=issues)


__all__ = ["FILE_DOES_NOT_EXIST", "STATS_UNAVAILABLE", "IntegrityValidator"]
