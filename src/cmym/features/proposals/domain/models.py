"""Summary: Proposal groups and operator decisions for one stage visit.
Why: Carry the old/suggested pair and the decision from the engine to the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from cmym.shared.track_store import FieldId, TrackRecord

from .alignment import AlignmentScript, DiffAligner


class DecisionKind(StrEnum):
    """How the operator resolved a proposal group."""

    ACCEPTED = "accepted"
    CLEARED = "cleared"
    EDITED = "edited"


@dataclass(frozen=True, slots=True)
class Decision:
    """Operator resolution; ``text`` is only set for edits."""

    kind: DecisionKind
    text: str | None = None

    @classmethod
    def accepted(cls) -> "Decision":
        return cls(DecisionKind.ACCEPTED)

    @classmethod
    def cleared(cls) -> "Decision":
        return cls(DecisionKind.CLEARED)

    @classmethod
    def edited(cls, text: str) -> "Decision":
        return cls(DecisionKind.EDITED, text)


@dataclass(eq=False)
class ProposalGroup:
    """Tracks sharing a grouping key plus one suggested value for ``field``."""

    field: FieldId
    members: list[TrackRecord]
    old_value: str | None
    suggested_value: str | None
    key: tuple[str, ...] = ()
    context: list[tuple[str, str]] = field(default_factory=list)
    can_be_empty: bool = True
    decision: Decision | None = None

    def __post_init__(self) -> None:
        if not self.members:
            raise ValueError("A proposal group needs at least one member")

    def alignment(self) -> AlignmentScript:
        """Token alignment from the old value to the current suggestion."""

        return DiffAligner.align_text(self.old_value, self.suggested_value)

    @property
    def is_satisfied(self) -> bool:
        """True when accepting the suggestion would change nothing."""

        return self.suggested_value == self.old_value

    @property
    def empties_forbidden_field(self) -> bool:
        """True when the suggestion blanks a field that must not be empty."""

        return not self.can_be_empty and DiffAligner.is_empty_result(self.alignment())

    def resulting_value(self) -> str | None:
        """Value the members will carry once the decision is applied."""

        if self.decision is None:
            return self.old_value
        if self.decision.kind is DecisionKind.CLEARED:
            return None
        if self.decision.kind is DecisionKind.EDITED:
            return self.decision.text
        return self.suggested_value

    def ensure_loaded(self) -> None:
        """Resolve candidates deferred until the group is first shown."""

    def accept(self) -> None:
        self.decision = Decision.accepted()

    def clear(self) -> None:
        self.decision = Decision.cleared()
        self.suggested_value = None

    def edit(self, text: str) -> None:
        self.decision = Decision.edited(text)
        self.suggested_value = text


__all__ = ["Decision", "DecisionKind", "ProposalGroup"]
