"""Summary: Cursor over (stage, group) kept for the whole session.
Why: Backward navigation restores the item the operator last looked at.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class NavigatorPosition:
    """Current stage and group indexes."""

    stage_index: int = 0
    item_index: int = 0


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp ``value`` into ``[lower, upper]``; ``upper`` below ``lower`` yields ``lower``."""

    return max(lower, min(value, upper))


__all__ = ["NavigatorPosition", "clamp"]
