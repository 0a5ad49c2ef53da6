"""Rich terminal surface for the review navigator."""

from __future__ import annotations

from collections.abc import Callable
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm as ConfirmPrompt
from rich.table import Table
from rich.text import Text

from cmym.features.coverart import CoverArtGroup, describe_image
from cmym.features.navigation import NavigationSignal, NavigatorPosition, Quit
from cmym.features.proposals import DiffAligner, EditKind, ProposalGroup, Stage
from cmym.platform.logging import ReviewRichHandler, logger

from .keys import COVER_HELP_TEXT, HELP_TEXT, parse_input

_STYLES: dict[EditKind, str] = {
    EditKind.DELETE: "red strike",
    EditKind.EQUAL: "",
    EditKind.INSERT: "bold green",
}


def render_alignment(group: ProposalGroup) -> Text:
    """Old-to-suggested alignment with removals struck through and additions in green."""

    script = DiffAligner.coalesce(group.alignment())
    text = Text()
    if not script:
        _ = text.append("(empty)", style="dim")
        return text
    for op in script:
        _ = text.append(op.token, style=_STYLES[op.kind])
    return text


def _shared_console() -> Console:
    for handler in logger.handlers:
        if isinstance(handler, ReviewRichHandler):
            return handler.console
    return Console(stderr=True)


@final
class RichReviewUI:
    """Line-oriented review prompts rendered with rich."""

    def __init__(
        self,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self._console: Console = console or _shared_console()
        self._read_line: Callable[[str], str] = read_line or self._console.input

    def show_stage(self, stage: Stage, group_count: int) -> None:
        self._console.rule(f"[bold cyan]{escape(stage.title)}[/bold cyan] ({group_count} group(s))")
        self._console.print(f"[dim]{HELP_TEXT}[/dim]")

    def notify(self, message: str) -> None:
        self._console.print(Text(message, style="yellow"))

    def prompt(
        self,
        stage: Stage,
        group: ProposalGroup,
        position: NavigatorPosition,
        group_count: int,
    ) -> NavigationSignal:
        self._render(stage, group, position, group_count)
        try:
            raw = self._read_line("> ")
        except (EOFError, KeyboardInterrupt):
            self._console.print()
            return Quit()
        return parse_input(raw)

    def confirm_empty(self, stage: Stage, group: ProposalGroup) -> bool:
        try:
            return ConfirmPrompt.ask(
                f"{escape(stage.title)} should not be empty for {len(group.members)} track(s). Empty it anyway?",
                console=self._console,
                default=False,
            )
        except (EOFError, KeyboardInterrupt):
            return False

    def _render(
        self,
        stage: Stage,
        group: ProposalGroup,
        position: NavigatorPosition,
        group_count: int,
    ) -> None:
        header = Text.assemble(
            (f"{stage.title} ", "bold"),
            (f"{position.item_index + 1}/{group_count}", "cyan"),
        )
        if group.decision is not None:
            _ = header.append(f"  [{group.decision.kind}]", style="magenta")
        self._console.print()
        self._console.print(header)

        table = Table.grid(padding=(0, 2))
        table.add_column(style="dim")
        table.add_column()
        for label, value in group.context:
            table.add_row(label, Text(value))
        self._console.print(table)

        if isinstance(group, CoverArtGroup):
            self._render_images(group)
        else:
            self._console.print(Text("Old: ", style="dim") + Text(group.old_value or "(empty)"))
            self._console.print(Text("New: ", style="dim") + render_alignment(group))

        if group.empties_forbidden_field:
            self._console.print("[bold red]Warning: this would empty a field that should be set[/bold red]")

    def _render_images(self, group: CoverArtGroup) -> None:
        self._console.print(Text("Currently embedded: ", style="dim") + Text(group.old_value or "(none)"))
        if not group.images:
            self._console.print("[dim]No candidate images[/dim]")
        for number, image in enumerate(group.images, start=1):
            marker = "*" if image in group.existing else " "
            self._console.print(Text(f" {marker}{number:>2}. {describe_image(image)}"))
        self._console.print(f"[dim]{COVER_HELP_TEXT}[/dim]")


__all__ = ["RichReviewUI", "render_alignment"]
