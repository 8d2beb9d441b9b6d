"""Display utilities for restoration results."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mediarestore.application.services.restore_service import ProjectRestoreReport


@final
class RestoreResultDisplay:
    """Render restoration outcomes in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(
        self,
        report: ProjectRestoreReport,
        *,
        quiet: bool = False,
        show_text_report: bool = False,
    ) -> None:
        """Print a summary table and, optionally, the plain-text report."""

        if quiet:
            return

        stats = report.result.stats
        self.console.print(f"\n[bold]Media check:[/bold] {escape(str(report.project_file))}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Status")
        table.add_column("Count", justify="right")
        table.add_row("Total", str(stats.total))
        table.add_row("[green]Available[/green]", str(stats.restored))
        table.add_row("[magenta]Relocated[/magenta]", str(stats.relocated))
        table.add_row("[yellow]Missing[/yellow]", str(stats.missing))
        table.add_row("[red]Corrupted[/red]", str(stats.corrupted))
        self.console.print(table)

        for relocated in report.result.relocated_files:
            self.console.print(
                f"[magenta]  • {escape(str(relocated.original.original_path))} → {escape(str(relocated.new_path))}"
                + f" ({relocated.confidence:.2f})[/magenta]"
            )
        for corrupted in report.result.corrupted_files:
            detail = "; ".join(corrupted.issues) or "integrity check failed"
            self.console.print(f"[red]  • {escape(str(corrupted.path))}: {escape(detail)}[/red]")
        for missing in report.result.missing_files:
            self.console.print(f"[yellow]  • {escape(str(missing.original_path))}[/yellow]")

        if report.resolution.removed_files:
            self.console.print(
                f"[yellow]Removed {len(report.resolution.removed_files)} missing file(s)[/yellow]"
            )
        elif report.needs_user_input:
            self.console.print(
                f"[yellow]{report.unresolved} missing file(s) need attention;"
                + " rerun with --remove-missing to drop them[/yellow]"
            )

        if show_text_report:
            self.console.print()
            self.console.print(report.report, markup=False, highlight=False)
