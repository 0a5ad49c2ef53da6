"""Summary: Track-level suggestion rules (disc, track number, track artist, title).
Why: These fields differ per file and need per-track or per-disc review.
"""

from __future__ import annotations

import re
from typing import ClassVar, Final

from cmym.features.proposals.domain import normalize
from cmym.shared.track_store import FieldId, TrackRecord

from .base import GroupKey, TextStage

_LEADING_DIGITS: Final[re.Pattern[str]] = re.compile(r"\s*(\d+)")
_DISC_FOLDER: Final[re.Pattern[str]] = re.compile(r"\b(?:disc|disk|cd)\s*[-_.]?\s*(\d+)", re.IGNORECASE)
_FILENAME_PREFIX: Final[re.Pattern[str]] = re.compile(r"^(?:\d{1,2}(?!\d))?[\W_]*")


def leading_number(value: str | None) -> int | None:
    """Integer formed by the leading digit run of ``value``."""

    if not value:
        return None
    match = _LEADING_DIGITS.match(value)
    return int(match.group(1)) if match else None


def disc_from_folder(folder_name: str) -> int | None:
    """Disc number from a folder named like ``Disc 2`` or ``CD1``."""

    match = _DISC_FOLDER.search(folder_name)
    return int(match.group(1)) if match else None


def title_from_filename(record: TrackRecord) -> str:
    """Strip a short leading track number and separators from the file stem."""

    return _FILENAME_PREFIX.sub("", record.path.stem, count=1).strip()


def _album_key(record: TrackRecord) -> tuple[str, str] | None:
    album = record.text(FieldId.ALBUM)
    if not album:
        return None
    return (record.text(FieldId.ALBUM_ARTIST) or "", album)


class DiscNumberStage(TextStage):
    """Suggest disc numbers for albums spread over several folders or discs."""

    stage_id: ClassVar[str] = "disc-number"
    title: ClassVar[str] = "Disc number"
    field: ClassVar[FieldId] = FieldId.DISC
    normalizes: ClassVar[bool] = False

    def __init__(self) -> None:
        self._disc_subgroups: dict[tuple[str, str], set[tuple[str, str]]] = {}

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        album = _album_key(record)
        if album is None:
            return None
        return (*album, str(record.folder), record.text(FieldId.DISC) or "")

    def select_groups(
        self, groups: dict[GroupKey, list[TrackRecord]]
    ) -> dict[GroupKey, list[TrackRecord]]:
        self._disc_subgroups = {}
        for key in groups:
            self._disc_subgroups.setdefault((key[0], key[1]), set()).add((key[2], key[3]))
        return groups

    def _is_multi_disc(self, key: GroupKey) -> bool:
        return len(self._disc_subgroups.get((key[0], key[1]), set())) > 1

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        if not self._is_multi_disc(key):
            return None
        number = leading_number(members[0].text(FieldId.DISC))
        if number is None:
            number = disc_from_folder(members[0].folder.name)
        return str(number) if number is not None else None

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        return not self._is_multi_disc(key)


class TrackNumberStage(TextStage):
    """Reduce track numbers to plain integers for incomplete albums."""

    stage_id: ClassVar[str] = "track-number"
    title: ClassVar[str] = "Track number"
    field: ClassVar[FieldId] = FieldId.TRACK
    normalizes: ClassVar[bool] = False

    def transform(self, text: str) -> str:
        number = leading_number(text)
        return str(number) if number is not None else text.strip()

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        album = _album_key(record)
        if album is None:
            return None
        return (*album, record.text(FieldId.DISC) or "", str(record.folder), record.path.name)

    def select_groups(
        self, groups: dict[GroupKey, list[TrackRecord]]
    ) -> dict[GroupKey, list[TrackRecord]]:
        albums: dict[GroupKey, list[TrackRecord]] = {}
        for key, members in groups.items():
            albums.setdefault(key[:4], []).extend(members)

        complete = {album for album, members in albums.items() if self.is_complete(members)}
        return {key: members for key, members in groups.items() if key[:4] not in complete}

    @staticmethod
    def is_complete(members: list[TrackRecord]) -> bool:
        """True when the members' numbers are exactly 1..N in any order."""

        numbers = [leading_number(member.text(FieldId.TRACK)) for member in members]
        if any(number is None for number in numbers):
            return False
        return sorted(n for n in numbers if n is not None) == list(range(1, len(members) + 1))

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        number = leading_number(members[0].text(FieldId.TRACK))
        return str(number) if number is not None else None

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        return False


class TrackArtistStage(TextStage):
    """Review track artists that differ from the album artist."""

    stage_id: ClassVar[str] = "track-artist"
    title: ClassVar[str] = "Track artist"
    field: ClassVar[FieldId] = FieldId.ARTIST

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        album_artist = record.text(FieldId.ALBUM_ARTIST)
        artist = record.text(FieldId.ARTIST)
        if artist is not None and artist == album_artist:
            return None
        if artist is None and album_artist is not None:
            return None
        if artist is None:
            # Nothing to inherit from: one decision per file.
            return ("", record.text(FieldId.ALBUM) or "", str(record.folder), "", str(record.path))
        return (
            album_artist or "",
            record.text(FieldId.ALBUM) or "",
            str(record.folder),
            artist,
            "",
        )

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        artist = members[0].text(FieldId.ARTIST)
        return normalize(artist) if artist else None

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        return members[0].text(FieldId.ALBUM_ARTIST) is not None

    def describe(self, key: GroupKey, members: list[TrackRecord]) -> list[tuple[str, str]]:
        context = super().describe(key, members)
        album_artist = members[0].text(FieldId.ALBUM_ARTIST)
        if album_artist:
            context.append(("Album artist", album_artist))
        if len(members) == 1:
            context.append(("File", members[0].path.name))
        return context


class TrackTitleStage(TextStage):
    """Suggest a canonical title per track, falling back to the file name."""

    stage_id: ClassVar[str] = "track-title"
    title: ClassVar[str] = "Track title"
    field: ClassVar[FieldId] = FieldId.TITLE

    def group_key(self, record: TrackRecord) -> GroupKey | None:
        return (
            record.text(FieldId.ALBUM_ARTIST) or "",
            record.text(FieldId.ALBUM) or "",
            str(record.folder),
            record.path.name,
        )

    def suggest(self, key: GroupKey, members: list[TrackRecord]) -> str | None:
        current = members[0].text(FieldId.TITLE)
        if current:
            return normalize(current)
        extracted = title_from_filename(members[0])
        return normalize(extracted) if extracted else None

    def can_be_empty(self, key: GroupKey, members: list[TrackRecord]) -> bool:
        return members[0].text(FieldId.ALBUM) is None

    def describe(self, key: GroupKey, members: list[TrackRecord]) -> list[tuple[str, str]]:
        context = super().describe(key, members)
        context.append(("File", members[0].path.name))
        artist = members[0].text(FieldId.ARTIST) or members[0].text(FieldId.ALBUM_ARTIST)
        if artist:
            context.append(("Artist", artist))
        return context


__all__ = [
    "DiscNumberStage",
    "TrackArtistStage",
    "TrackNumberStage",
    "TrackTitleStage",
    "disc_from_folder",
    "leading_number",
    "title_from_filename",
]
