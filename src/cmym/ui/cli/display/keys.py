"""Map typed review input onto navigation signals."""

from __future__ import annotations

from typing import Final

from cmym.features.navigation import (
    PAGE_SIZE,
    Clear,
    Confirm,
    Edit,
    NavigationSignal,
    Quit,
    Step,
    SwitchPane,
)

CLEAR_INPUT: Final[str] = "-"

NAVIGATION_KEYS: Final[dict[str, NavigationSignal]] = {
    "\\p": Step(-1),
    "\\n": Step(1),
    "\\P": Step(-PAGE_SIZE),
    "\\N": Step(PAGE_SIZE),
    "\\[": SwitchPane(-1),
    "\\]": SwitchPane(1),
    "\\q": Quit(),
}

HELP_TEXT: Final[str] = (
    "Enter accept | - clear | text edit | \\p \\n prev/next | \\P \\N page | "
    "\\[ \\] prev/next stage | \\q quit"
)
COVER_HELP_TEXT: Final[str] = "N first | dN delete | oN only | vN preview | URL fetch"


def parse_input(raw: str) -> NavigationSignal:
    """Signal for one line of operator input."""

    text = raw.rstrip("\r\n")
    if not text.strip():
        return Confirm()
    if text.strip() == CLEAR_INPUT:
        return Clear()
    signal = NAVIGATION_KEYS.get(text.strip())
    if signal is not None:
        return signal
    return Edit(text)


__all__ = ["COVER_HELP_TEXT", "HELP_TEXT", "NAVIGATION_KEYS", "parse_input"]
