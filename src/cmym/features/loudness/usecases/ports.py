"""Ports for loudness analysis.

Where: features/loudness/usecases.
What: Protocol for invoking the external gain analysis program.
Why: Let the scheduler run against fakes in tests and a subprocess in production.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class AnalysisRunner(Protocol):
    """Invoke the external analysis executable."""

    @property
    def executable(self) -> str:
        """Name or path of the executable, for messages."""
        ...

    def available(self) -> bool:
        """Return True when the executable can be launched."""
        ...

    def undo(self, files: list[Path]) -> None:
        """Remove any gain adjustment previously applied to ``files``."""
        ...

    def analyze(self, files: list[Path], report_path: Path) -> None:
        """Analyse ``files`` and write the tab-separated report to ``report_path``."""
        ...


__all__ = ["AnalysisRunner"]
