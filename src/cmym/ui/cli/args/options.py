"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class ReviewArgs:
    """Command line arguments for the ``review`` subcommand."""

    command: Literal["review"]
    music_path: Path
    snapshot: Path | None
    save: bool
    rename_root: Path | None
    stages: list[str] | None
    offline: bool
    preview_file: Path | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class StagesArgs:
    """Command line arguments for the ``stages`` subcommand."""

    command: Literal["stages"]


CLIArgs = ReviewArgs | StagesArgs

__all__ = ["CLIArgs", "ReviewArgs", "StagesArgs"]
