"""Summary: Album-level suggestion rules (album artist, title, year, compilation).
Why: Album fields are shared by every track of a folder and are reviewed once per album.
"""

from __future__ import annotations

import re
from typing import ClassVar, Final, override

from cmym.features.proposals.domain import DecisionKind, ProposalGroup, normalize
from cmym.shared.track_store import (
    COMPILATION_KEY,
    COMPILATION_VALUE,
    VARIOUS_ARTISTS,
    FieldId,
    TrackRecord,
    TrackStore,
)

from .base import GroupKey, TextStage, distinct

_YEAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")

# Custom text descriptions consulted before the plain year field.
HISTORICAL_YEAR_KEYS: Final[tuple[str, ...]] = ("ORIGINALDATE", "ORIGINALYEAR")

COMPILATION_YES: Final[str] = "yes"
_TRUTHY: Final[frozenset[str]] = frozenset({"yes", "y", "1", "true", "on"})


def find_year(text: str | None) -> str | None:
    """First 4-digit year between 1900 and 2099 in ``text``."""

    if not text:
        return None
    match = _YEAR_PATTERN.search(text)
    return match.group(1) if match else None


class AlbumArtistStage(TextStage):
    """Suggest a canonical album artist per folder."""

    stage_id: ClassVar[str] = "album-artist"
    title: ClassVar[str] = "Album artist"
    field: ClassVar[FieldId] = FieldId.ALBUM_ARTIST

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        return (str(record.folder), record.text(FieldId.ALBUM_ARTIST) or "")

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        current = members[0].text(FieldId.ALBUM_ARTIST)
        if current == VARIOUS_ARTISTS:
            return current
        if current is None or not current.strip():
            artists = distinct(member.text(FieldId.ARTIST) for member in members)
            if len(artists) == 1 and artists[0] != VARIOUS_ARTISTS:
                return normalize(str(artists[0]))
            return None
        return normalize(current)

    def describe(self, key: GroupKey, members: list[TrackRecord]) -> list[tuple[str, str]]:
        context = super().describe(key, members)
        artists = distinct(member.text(FieldId.ARTIST) for member in members)
        context.append(("Track artists", ", ".join(str(artist) for artist in artists)))
        return context

    @override
    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        super().apply(store, group)
        decision = group.decision
        if decision is None or decision.kind is DecisionKind.CLEARED:
            return
        new_value = group.resulting_value()
        if new_value is None or group.old_value is None:
            return
        for member in group.members:
            if member.text(FieldId.ARTIST) == group.old_value:
                member.set_text(FieldId.ARTIST, new_value)


class AlbumTitleStage(TextStage):
    """Suggest a canonical album title."""

    stage_id: ClassVar[str] = "album-title"
    title: ClassVar[str] = "Album title"
    field: ClassVar[FieldId] = FieldId.ALBUM

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        return (
            record.text(FieldId.ALBUM_ARTIST) or "",
            record.text(FieldId.ALBUM) or "",
            str(record.folder),
        )

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        current = members[0].text(FieldId.ALBUM)
        return normalize(current) if current else None

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        # Singles have no album.
        return all(member.text(FieldId.ALBUM) is None for member in members)


class AlbumYearStage(TextStage):
    """Suggest the release year of an album from date-like fields or the folder."""

    stage_id: ClassVar[str] = "album-year"
    title: ClassVar[str] = "Album year"
    field: ClassVar[FieldId] = FieldId.YEAR
    normalizes: ClassVar[bool] = False

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        album = record.text(FieldId.ALBUM)
        if not album:
            return None
        return (
            record.text(FieldId.ALBUM_ARTIST) or "",
            album,
            str(record.folder),
            record.text(FieldId.YEAR) or "",
        )

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        for description in HISTORICAL_YEAR_KEYS:
            for member in members:
                year = find_year(member.custom(description))
                if year:
                    return year
        for member in members:
            year = find_year(member.text(FieldId.YEAR))
            if year:
                return year
        return find_year(members[0].folder.name)


class CompilationStage(TextStage):
    """Flag albums whose tracks come from several artists as compilations."""

    stage_id: ClassVar[str] = "compilation"
    title: ClassVar[str] = "Compilation"
    field: ClassVar[FieldId] = FieldId.CUSTOM_TEXT
    normalizes: ClassVar[bool] = False

    def transform(self, text: str) -> str:
        return COMPILATION_YES if text.strip().lower() in _TRUTHY else ""

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        album = record.text(FieldId.ALBUM)
        if not album:
            return None
        return (album, str(record.folder))

    def select_groups(
        self, groups: dict[GroupKey, list[TrackRecord]]
    ) -> dict[GroupKey, list[TrackRecord]]:
        return {
            key: members
            for key, members in groups.items()
            if any(member.text(FieldId.ALBUM_ARTIST) is None for member in members)
            or any(member.is_compilation for member in members)
        }

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        artists = {member.text(FieldId.ARTIST) for member in members}
        return COMPILATION_YES if len(artists) > 1 else None

    def describe(self, key: GroupKey, members: list[TrackRecord]) -> list[tuple[str, str]]:
        context = super().describe(key, members)
        artists = distinct(member.text(FieldId.ARTIST) for member in members)
        context.append(("Track artists", ", ".join(str(artist) for artist in artists)))
        return context

    @override
    def _build_group(self, key: GroupKey, members: list[TrackRecord]) -> ProposalGroup:
        group = super()._build_group(key, members)
        group.old_value = COMPILATION_YES if all(member.is_compilation for member in members) else None
        return group

    @override
    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        del store
        marker = COMPILATION_VALUE if group.resulting_value() == COMPILATION_YES else None
        for member in group.members:
            member.set_custom(COMPILATION_KEY, marker)


__all__ = [
    "AlbumArtistStage",
    "AlbumTitleStage",
    "AlbumYearStage",
    "COMPILATION_YES",
    "CompilationStage",
    "HISTORICAL_YEAR_KEYS",
    "find_year",
]
