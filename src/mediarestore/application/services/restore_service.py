"""Application service to check a project's media references against the filesystem."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from mediarestore.features.restoration import (
    MissingFileDecision,
    ProjectFileError,
    ResolutionAction,
    ResolutionOutcome,
    RestorationController,
    RestorationOrchestrator,
    RestorationResult,
    RestoreOptions,
    generate_report,
)
from mediarestore.features.restoration.adapters.filesystem.local import LocalFilesystemProbe
from mediarestore.features.restoration.adapters.project.json_project import JsonProjectStore
from mediarestore.features.restoration.usecases.ports import FilesystemProbe, ProjectReader


@dataclass(slots=True)
class ProjectRestoreRequest:
    """Parameters describing one check of a project file."""

    project_file: Path
    auto_resolve: bool = False
    show_dialog: bool = True
    remove_missing: bool = False


@dataclass(slots=True)
class ProjectRestoreReport:
    """Outcome of checking one project file."""

    project_file: Path
    result: RestorationResult
    needs_user_input: bool
    resolution: ResolutionOutcome = field(default_factory=ResolutionOutcome)
    report: str = ""

    @property
    def unresolved(self) -> int:
        """Missing references the user neither located nor removed."""

        return len(self.result.missing_files) - len(self.resolution.removed_files) - len(
            self.resolution.found_files
        )


@final
class ProjectRestoreService:
    """Application façade wiring adapters into the restoration controller."""

    _probe: FilesystemProbe
    _owned_probe: LocalFilesystemProbe | None
    _reader: ProjectReader
    _controller: RestorationController
    _logger: Logger

    def __init__(
        self,
        *,
        probe: FilesystemProbe | None = None,
        reader: ProjectReader | None = None,
        orchestrator: RestorationOrchestrator | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or getLogger(__name__)
        self._owned_probe = None
        if probe is None:
            self._owned_probe = probe = LocalFilesystemProbe(logger=self._logger)
        self._probe = probe
        self._reader = reader or JsonProjectStore()
        self._controller = RestorationController(
            orchestrator or RestorationOrchestrator(self._probe, logger=self._logger),
            logger=self._logger,
        )

    def close(self) -> None:
        """Release the filesystem probe this service created, if any."""

        if self._owned_probe is not None:
            self._owned_probe.close()

    @property
    def controller(self) -> RestorationController:
        return self._controller

    async def discover_projects(self, path: Path) -> list[Path]:
        """Return ``path`` itself for a file, or the JSON project files inside a directory."""

        if path.is_dir():
            return await self._probe.list_json_files(path)
        return [path]

    async def check(self, request: ProjectRestoreRequest) -> ProjectRestoreReport:
        """Run one pass and settle any human-resolution round non-interactively."""

        project = self._reader.load(request.project_file)
        self._controller.reset_restoration()
        outcome = await self._controller.restore_project_media(
            project.media,
            project.music,
            request.project_file,
            RestoreOptions(auto_resolve=request.auto_resolve, show_dialog=request.show_dialog),
        )

        resolution = ResolutionOutcome()
        if outcome.needs_user_input:
            if request.remove_missing:
                resolution = self._controller.handle_missing_files_resolution(
                    [
                        MissingFileDecision(reference=ref, action=ResolutionAction.REMOVE)
                        for ref in outcome.result.missing_files
                    ]
                )
            else:
                self._controller.cancel_missing_files_dialog()

        return ProjectRestoreReport(
            project_file=request.project_file,
            result=outcome.result,
            needs_user_input=outcome.needs_user_input,
            resolution=resolution,
            report=generate_report(outcome.result),
        )

    def run(self, request: ProjectRestoreRequest) -> list[ProjectRestoreReport]:
        """Check a project file, or every project file in a directory.

        Raises:
            ProjectFileError: When a single requested project file is unusable.
                Unusable files found while scanning a directory are skipped.
        """

        scanning_directory = request.project_file.is_dir()

        async def _run_all() -> list[ProjectRestoreReport]:
            reports: list[ProjectRestoreReport] = []
            for project_file in await self.discover_projects(request.project_file):
                single = ProjectRestoreRequest(
                    project_file=project_file,
                    auto_resolve=request.auto_resolve,
                    show_dialog=request.show_dialog,
                    remove_missing=request.remove_missing,
                )
                try:
                    reports.append(await self.check(single))
                except ProjectFileError as exc:
                    # A directory may hold JSON files that are not projects.
                    if not scanning_directory:
                        raise
                    self._logger.warning("Skipping %s: %s", project_file, exc)
            return reports

        return asyncio.run(_run_all())


__all__ = ["ProjectRestoreReport", "ProjectRestoreRequest", "ProjectRestoreService"]
