"""Data structures describing a rename plan and its outcome."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True, frozen=True)
class RenameMove:
    """Move one file from ``source`` to ``destination``."""

    source: Path
    destination: Path

    @property
    def is_noop(self) -> bool:
        return self.source == self.destination


@dataclass(slots=True)
class FolderBatch:
    """All moves landing in one destination folder; applied whole or not at all."""

    folder: Path
    moves: list[RenameMove] = field(default_factory=list)

    def conflicts(self) -> list[str]:
        """Reasons this batch cannot be applied; empty when it is safe."""

        reasons: list[str] = []
        counts = Counter(move.destination for move in self.moves)
        for destination, count in counts.items():
            if count > 1:
                reasons.append(f"{count} files would be named {destination.name}")

        for move in self.moves:
            if not move.is_noop and move.destination.exists():
                reasons.append(f"{move.destination.name} already exists")
        return reasons


@dataclass(slots=True)
class RenameReport:
    """Outcome of executing a rename plan."""

    moved: dict[Path, Path] = field(default_factory=dict)
    skipped: list[FolderBatch] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)


__all__ = ["FolderBatch", "RenameMove", "RenameReport"]
