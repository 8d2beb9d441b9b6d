"""Controller-owned state and user resolution types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .models import MediaAsset, RestorationResult, SavedMediaReference


class RestorationPhase(str, Enum):
    SCANNING = "scanning"
    RESTORING = "restoring"
    USER_INPUT = "user_input"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(slots=True)
class RestorationState:
    """Phase and progress (0-100) exposed to the UI; starts idle in ``COMPLETED``."""

    phase: RestorationPhase = RestorationPhase.COMPLETED
    progress: int = 0
    error: str | None = None
    result: RestorationResult | None = None
    pending_missing: list[SavedMediaReference] = field(default_factory=list)


class ResolutionAction(str, Enum):
    FOUND = "found"
    REMOVE = "remove"


@dataclass(slots=True, frozen=True)
class MissingFileDecision:
    """A user's answer for one missing reference."""

    reference: SavedMediaReference
    action: ResolutionAction
    new_path: Path | None = None


@dataclass(slots=True)
class ResolutionOutcome:
    found_files: list[MediaAsset] = field(default_factory=list)
    removed_files: list[SavedMediaReference] = field(default_factory=list)


@dataclass(slots=True)
class RestorationOutcome:
    """Return value of a controller-driven pass."""

    result: RestorationResult
    needs_user_input: bool


__all__ = [
    "MissingFileDecision",
    "ResolutionAction",
    "ResolutionOutcome",
    "RestorationOutcome",
    "RestorationPhase",
    "RestorationState",
]
