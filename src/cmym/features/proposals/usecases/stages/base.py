"""Summary: Stage interface and the shared machinery of text-field stages.
Why: Each stage only states how it groups records and what it suggests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar

from cmym.features.proposals.domain import ProposalGroup, normalize
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import FieldId, TrackRecord, TrackStore

GroupKey = tuple[str, ...]

# Failures inside a suggestion rule that degrade to "no suggestion".
RULE_ERRORS: tuple[type[Exception], ...] = (ValueError, KeyError, TypeError, IndexError)


class Stage(ABC):
    """One independently computed field-correction pass."""

    stage_id: ClassVar[str]
    title: ClassVar[str]
    field: ClassVar[FieldId]

    def transform(self, text: str) -> str:
        """Normalization applied to operator edits; identity by default."""

        return text

    def availability_error(self) -> str | None:
        """Reason the stage cannot run right now, or ``None``."""

        return None

    @abstractmethod
    def compute(self, store: TrackStore) -> list[ProposalGroup]:
        """Group ``store`` and derive one proposal per group."""

    def edit(self, group: ProposalGroup, text: str) -> bool:
        """Record an operator edit; return True when the cursor should advance."""

        value = self.transform(text)
        if value:
            group.edit(value)
        else:
            group.clear()
        return True

    @abstractmethod
    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        """Write one decided group into ``store``."""

    def commit(self, store: TrackStore, groups: Iterable[ProposalGroup]) -> int:
        """Apply every decided group and return how many were written."""

        applied = 0
        for group in groups:
            if group.decision is None:
                continue
            self.apply(store, group)
            applied += 1
        return applied


class TextStage(Stage):
    """Stage editing one text field with key-grouped proposals."""

    normalizes: ClassVar[bool] = True

    def transform(self, text: str) -> str:
        return normalize(text.strip()) if self.normalizes else text.strip()

    @abstractmethod
    def group_key(self, record: TrackRecord) -> GroupKey | None:
        """Grouping key for ``record``; ``None`` leaves it out of the stage."""

    @abstractmethod
    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        """Suggested value for the group."""

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        del key, members
        return True

    def describe(self, key: GroupKey, members: list[TrackRecord]) -> list[tuple[str, str]]:
        """Context rows shown next to the proposal."""

        del key
        folders = sorted({str(member.folder) for member in members})
        context = [("Folder", ", ".join(folders)), ("Tracks", str(len(members)))]
        album = members[0].text(FieldId.ALBUM)
        if album:
            context.append(("Album", album))
        return context

    def select_groups(
        self, groups: dict[GroupKey, list[TrackRecord]]
    ) -> dict[GroupKey, list[TrackRecord]]:
        """Hook for dropping whole groups before proposals are built."""

        return groups

    def compute(self, store: TrackStore) -> list[ProposalGroup]:
        grouped: dict[GroupKey, list[TrackRecord]] = {}
        for record in store:
            key = self.group_key(record)
            if key is None:
                continue
            grouped.setdefault(key, []).append(record)

        proposals: list[ProposalGroup] = []
        for key, members in sorted(self.select_groups(grouped).items(), key=lambda item: str(item[0])):
            proposals.append(self._build_group(key, members))
        return proposals

    def _build_group(self, key: GroupKey, members: list[TrackRecord]) -> ProposalGroup:
        old_value = members[0].text(self.field)
        try:
            suggested = self.suggest(key, members)
        except RULE_ERRORS as exc:
            logger.warning(
                "No suggestion for %s group %s: %s",
                self.stage_id,
                key,
                exc,
            )
            suggested = None
        return ProposalGroup(
            field=self.field,
            members=members,
            old_value=old_value,
            suggested_value=suggested,
            key=key,
            context=self.describe(key, members),
            can_be_empty=self.can_be_empty(key, members),
        )

    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        del store
        value = group.resulting_value()
        for member in group.members:
            member.set_text(self.field, value)
        logger.debug(
            "Applied %s decision %s to %d track(s): %r",
            self.stage_id,
            group.decision.kind if group.decision else None,
            len(group.members),
            value,
            extra={"review_event": ReviewEvent.GROUP_DECISION},
        )


def distinct(values: Iterable[str | None], *, skip_blank: bool = True) -> list[str | None]:
    """Distinct values in first-seen order."""

    seen: list[str | None] = []
    for value in values:
        if skip_blank and (value is None or not value.strip()):
            continue
        if value not in seen:
            seen.append(value)
    return seen


__all__ = [
    "GroupKey",
    "RULE_ERRORS",
    "Stage",
    "TextStage",
    "distinct",
]
