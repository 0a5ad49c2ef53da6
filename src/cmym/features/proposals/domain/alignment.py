"""Summary: Longest-common-subsequence edit scripts between token sequences.
Why: Show the operator which parts of a value are removed, kept or added.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Final


class EditKind(StrEnum):
    """Kind of one alignment step."""

    DELETE = "delete"
    EQUAL = "equal"
    INSERT = "insert"


@dataclass(frozen=True, slots=True)
class AlignmentOp:
    """A single token with the edit applied to it."""

    kind: EditKind
    token: str


AlignmentScript = list[AlignmentOp]

_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"\w+|\s+|[^\w\s]")


def tokenize(text: str | None) -> list[str]:
    """Split ``text`` into word, whitespace and punctuation tokens.

    Joining the tokens reproduces ``text`` exactly.
    """

    if not text:
        return []
    return _TOKEN_PATTERN.findall(text)


class DiffAligner:
    """Myers O(ND) difference algorithm over arbitrary token sequences."""

    _OLD_SIDE: ClassVar[frozenset[EditKind]] = frozenset({EditKind.EQUAL, EditKind.DELETE})
    _NEW_SIDE: ClassVar[frozenset[EditKind]] = frozenset({EditKind.EQUAL, EditKind.INSERT})

    @classmethod
    def align(cls, old_tokens: Sequence[str], new_tokens: Sequence[str]) -> AlignmentScript:
        """Return the shortest edit script turning ``old_tokens`` into ``new_tokens``."""

        old = list(old_tokens)
        new = list(new_tokens)
        n, m = len(old), len(new)
        offset = n + m
        frontier = [0] * (2 * offset + 2)
        trace: list[list[int]] = []

        for d in range(offset + 1):
            trace.append(frontier.copy())
            for k in range(-d, d + 1, 2):
                if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
                    x = frontier[offset + k + 1]
                else:
                    x = frontier[offset + k - 1] + 1
                y = x - k
                while x < n and y < m and old[x] == new[y]:
                    x += 1
                    y += 1
                frontier[offset + k] = x
                if x >= n and y >= m:
                    return cls._backtrack(trace, old, new, offset)

        return []  # pragma: no cover - loop always terminates at d == n + m

    @staticmethod
    def _backtrack(
        trace: list[list[int]],
        old: list[str],
        new: list[str],
        offset: int,
    ) -> AlignmentScript:
        x, y = len(old), len(new)
        reversed_ops: AlignmentScript = []

        for d in range(len(trace) - 1, -1, -1):
            frontier = trace[d]
            k = x - y
            if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
                prev_k = k + 1
            else:
                prev_k = k - 1
            prev_x = frontier[offset + prev_k]
            prev_y = prev_x - prev_k

            while x > prev_x and y > prev_y:
                reversed_ops.append(AlignmentOp(EditKind.EQUAL, old[x - 1]))
                x -= 1
                y -= 1

            if d > 0:
                if x == prev_x:
                    reversed_ops.append(AlignmentOp(EditKind.INSERT, new[y - 1]))
                else:
                    reversed_ops.append(AlignmentOp(EditKind.DELETE, old[x - 1]))
            x, y = prev_x, prev_y

        reversed_ops.reverse()
        return reversed_ops

    @classmethod
    def align_text(cls, old: str | None, new: str | None) -> AlignmentScript:
        """Align two optional strings token by token."""

        return cls.align(tokenize(old), tokenize(new))

    @classmethod
    def old_text(cls, script: AlignmentScript) -> str:
        """Replay ``equal`` and ``delete`` steps."""

        return "".join(op.token for op in script if op.kind in cls._OLD_SIDE)

    @classmethod
    def new_text(cls, script: AlignmentScript) -> str:
        """Replay ``equal`` and ``insert`` steps."""

        return "".join(op.token for op in script if op.kind in cls._NEW_SIDE)

    @classmethod
    def is_empty_result(cls, script: AlignmentScript) -> bool:
        """Return True when the edited value would be blank."""

        return not cls.new_text(script).strip()

    @staticmethod
    def coalesce(script: AlignmentScript) -> AlignmentScript:
        """Merge adjacent steps of the same kind for compact rendering."""

        merged: AlignmentScript = []
        for op in script:
            if merged and merged[-1].kind is op.kind:
                merged[-1] = AlignmentOp(op.kind, merged[-1].token + op.token)
            else:
                merged.append(op)
        return merged


__all__ = ["AlignmentOp", "AlignmentScript", "DiffAligner", "EditKind", "tokenize"]
