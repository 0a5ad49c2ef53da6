"""Stage listing command implementation."""

from typing import final

from rich.console import Console
from rich.table import Table

from cmym.features.coverart import CoverArtStage
from cmym.features.loudness import GainStage
from cmym.features.proposals import Stage, build_catalog


@final
class StagesCommand:
    """Print the stage catalog in review order."""

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or Console()

    def execute(self) -> list[Stage]:
        stages = build_catalog((CoverArtStage(), GainStage()))
        table = Table(title="Review stages")
        table.add_column("#", justify="right")
        table.add_column("Id", style="cyan")
        table.add_column("Title")
        for number, stage in enumerate(stages, start=1):
            table.add_row(str(number), stage.stage_id, stage.title)
        self._console.print(table)
        return stages
