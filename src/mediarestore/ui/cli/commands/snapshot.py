"""Snapshot command implementation for the CLI."""

from __future__ import annotations

from typing import final

from mediarestore.application.services.snapshot_service import SnapshotRequest, SnapshotService
from mediarestore.features.restoration.usecases.ports import ProjectMedia
from mediarestore.ui.cli.args.options import SnapshotArgs


@final
class SnapshotCommand:
    """Command that records media files as saved references in a project file."""

    def __init__(self, args: SnapshotArgs) -> None:
        self.args = args
        self.service = SnapshotService()

    def execute(self) -> ProjectMedia:
        return self.service.run(
            SnapshotRequest(
                media_root=self.args.media_root,
                project_file=self.args.project_file,
                recursive=self.args.recursive,
            )
        )
