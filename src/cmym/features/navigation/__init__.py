# Path: `src/cmym/features/navigation/__init__.py`
# Summary: Export the navigator, its signals and its UI port.
# Why: Session wiring and UI adapters share these symbols.

from .navigator import Navigator, StageExit
from .ports import ReviewPort
from .position import NavigatorPosition, clamp
from .signals import (
    PAGE_SIZE,
    Clear,
    Confirm,
    Edit,
    NavigationSignal,
    Quit,
    Step,
    SwitchPane,
)

__all__ = [
    "Clear",
    "Confirm",
    "Edit",
    "NavigationSignal",
    "Navigator",
    "NavigatorPosition",
    "PAGE_SIZE",
    "Quit",
    "ReviewPort",
    "StageExit",
    "Step",
    "SwitchPane",
    "clamp",
]
