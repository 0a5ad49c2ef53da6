"""Summary display for finished reviews."""

from typing import final

from rich.console import Console
from rich.markup import escape

from cmym.application.services import ReviewSummary


@final
class SummaryDisplay:
    """Print what a review run changed."""

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or Console()

    def show(self, summary: ReviewSummary) -> None:
        session = summary.session
        status = "[yellow]cancelled[/yellow]" if session.cancelled else "[green]complete[/green]"
        self._console.print(f"\n[bold]Review {status}[/bold]")
        self._console.print(f"Tracks: {summary.track_count}")
        self._console.print(f"Decisions applied: {session.applied}")

        if summary.written or summary.write_failures:
            line = f"Tags written: {summary.written}"
            if summary.write_failures:
                line += f" [red]({summary.write_failures} failed)[/red]"
            self._console.print(line)

        if summary.rename is not None:
            self._console.print(f"Files moved: {len(summary.rename.moved)}")
            for folder in summary.skipped_folders:
                self._console.print(f"[yellow]Skipped folder:[/yellow] {escape(str(folder))}")
            for source, reason in summary.rename.failed.items():
                self._console.print(f"[red]Failed:[/red] {escape(str(source))}: {escape(str(reason))}")

        if summary.snapshot_path is not None:
            self._console.print(f"Snapshot: {escape(str(summary.snapshot_path))}")


__all__ = ["SummaryDisplay"]
