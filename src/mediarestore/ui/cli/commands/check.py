"""Check command implementation for the CLI."""

from __future__ import annotations

from typing import final

from mediarestore.application.services.restore_service import (
    ProjectRestoreReport,
    ProjectRestoreRequest,
    ProjectRestoreService,
)
from mediarestore.ui.cli.args.options import CheckArgs
from mediarestore.ui.cli.display.restore_result import RestoreResultDisplay


@final
class CheckCommand:
    """Command that runs a restoration pass for one or more project files."""

    def __init__(self, args: CheckArgs) -> None:
        self.args = args
        self.service = ProjectRestoreService()
        self.display = RestoreResultDisplay()

    def execute(self) -> list[ProjectRestoreReport]:
        """Execute the check command."""

        request = ProjectRestoreRequest(
            project_file=self.args.project_path,
            auto_resolve=self.args.auto_resolve,
            show_dialog=self.args.show_dialog,
            remove_missing=self.args.remove_missing,
        )
        try:
            reports = self.service.run(request)
        finally:
            self.service.close()
        for report in reports:
            self.display.show_report(
                report,
                quiet=self.args.quiet,
                show_text_report=self.args.show_report,
            )
        return reports
