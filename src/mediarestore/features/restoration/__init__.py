"""Public surface for the restoration feature."""

from .domain.errors import (
    ProjectFileError,
    ProjectPathError,
    RestorationError,
    RestorationInProgressError,
)
from .domain.models import (
    CorruptedFile,
    FileStats,
    MediaAsset,
    MediaStatus,
    MusicMetadata,
    RelocatedFile,
    RestorationResult,
    RestorationStats,
    RestoreOptions,
    SavedMediaReference,
    SavedMusicReference,
    ValidationResult,
)
from .domain.path_resolver import resolve_relative, to_absolute, to_relative
from .domain.state import (
    MissingFileDecision,
    ResolutionAction,
    ResolutionOutcome,
    RestorationOutcome,
    RestorationPhase,
    RestorationState,
)
from .usecases.candidate_search import CandidateSearch
from .usecases.controller import RestorationController
from .usecases.integrity import IntegrityValidator
from .usecases.orchestrator import RestorationOrchestrator, generate_report

__all__ = [
    "CandidateSearch",
    "CorruptedFile",
    "FileStats",
    "IntegrityValidator",
    "MediaAsset",
    "MediaStatus",
    "MissingFileDecision",
    "MusicMetadata",
    "ProjectFileError",
    "ProjectPathError",
    "RelocatedFile",
    "ResolutionAction",
    "ResolutionOutcome",
    "RestorationController",
    "RestorationError",
    "RestorationInProgressError",
    "RestorationOrchestrator",
    "RestorationOutcome",
    "RestorationPhase",
    "RestorationResult",
    "RestorationState",
    "RestorationStats",
    "RestoreOptions",
    "SavedMediaReference",
    "SavedMusicReference",
    "ValidationResult",
    "generate_report",
    "resolve_relative",
    "to_absolute",
    "to_relative",
]
