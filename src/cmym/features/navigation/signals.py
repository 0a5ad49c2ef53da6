"""Summary: Navigation signals returned by one review interaction.
Why: The navigator dispatches on plain values instead of exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

PAGE_SIZE: Final[int] = 10


@dataclass(frozen=True, slots=True)
class Confirm:
    """Accept the current suggestion."""


@dataclass(frozen=True, slots=True)
class Clear:
    """Remove the field and forget the suggestion."""


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace the suggestion with operator text."""

    text: str


@dataclass(frozen=True, slots=True)
class Step:
    """Move the cursor within the stage by ``delta`` groups."""

    delta: int


@dataclass(frozen=True, slots=True)
class SwitchPane:
    """Leave the stage towards the previous (-1) or next (+1) stage."""

    direction: int


@dataclass(frozen=True, slots=True)
class Quit:
    """End the session after committing confirmed decisions."""


NavigationSignal = Confirm | Clear | Edit | Step | SwitchPane | Quit


__all__ = [
    "Clear",
    "Confirm",
    "Edit",
    "NavigationSignal",
    "PAGE_SIZE",
    "Quit",
    "Step",
    "SwitchPane",
]
