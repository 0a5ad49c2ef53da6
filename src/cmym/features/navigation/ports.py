"""Ports for the review navigator.

Where: features/navigation.
What: Protocol describing the interactive surface the navigator drives.
Why: Keep terminal rendering and input handling out of the navigation logic.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cmym.features.proposals import ProposalGroup, Stage

from .position import NavigatorPosition
from .signals import NavigationSignal


@runtime_checkable
class ReviewPort(Protocol):
    """Interactive collaborator presenting groups and reading decisions."""

    def show_stage(self, stage: Stage, group_count: int) -> None:
        """Announce that ``stage`` was entered with ``group_count`` groups."""
        ...

    def notify(self, message: str) -> None:
        """Show an informational message."""
        ...

    def prompt(
        self,
        stage: Stage,
        group: ProposalGroup,
        position: NavigatorPosition,
        group_count: int,
    ) -> NavigationSignal:
        """Present ``group`` and return the operator's signal."""
        ...

    def confirm_empty(self, stage: Stage, group: ProposalGroup) -> bool:
        """Ask before blanking a field that should not be empty."""
        ...
