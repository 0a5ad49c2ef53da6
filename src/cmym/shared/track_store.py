"""Summary: Track records and the ordered store every stage reads from.
Why: Give all stages one mutable source of truth keyed by immutable file paths.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final, cast


class FieldId(StrEnum):
    """Fixed set of tag fields curated by the review stages."""

    ALBUM_ARTIST = "album_artist"
    ALBUM = "album"
    DISC = "disc"
    TRACK = "track"
    ARTIST = "artist"
    TITLE = "title"
    YEAR = "year"
    COVER_IMAGES = "cover_images"
    CUSTOM_TEXT = "custom_text"


TEXT_FIELDS: Final[tuple[FieldId, ...]] = (
    FieldId.ALBUM_ARTIST,
    FieldId.ALBUM,
    FieldId.DISC,
    FieldId.TRACK,
    FieldId.ARTIST,
    FieldId.TITLE,
    FieldId.YEAR,
)

# Marker stored in the custom text mapping for compilation albums.
COMPILATION_KEY: Final[str] = "COMPILATION"
COMPILATION_VALUE: Final[str] = "1"

VARIOUS_ARTISTS: Final[str] = "Various Artists"

FieldValue = str | list[bytes] | dict[str, str]
FieldMap = dict[FieldId, FieldValue]


@dataclass(frozen=True, slots=True)
class FieldChanges:
    """Fields and custom text keys a record changed since it was loaded."""

    fields: frozenset[FieldId] = frozenset()
    custom_keys: frozenset[str] = frozenset()

    def __bool__(self) -> bool:
        return bool(self.fields or self.custom_keys)


class DuplicatePathError(ValueError):
    """Raised when two records claim the same file path."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Duplicate track path in store: {path}")
        self.path: Path = path


def coerce_field_map(raw: Mapping[str, object]) -> FieldMap:
    """Validate a loose mapping into a field map, omitting empty values.

    Raises:
        ValueError: If a key is not a known field or a value has the wrong shape.
    """

    result: FieldMap = {}
    for key, value in raw.items():
        try:
            field_id = FieldId(key)
        except ValueError as exc:
            raise ValueError(f"Unknown field id: {key!r}") from exc

        if field_id is FieldId.COVER_IMAGES:
            if not isinstance(value, (list, tuple)):
                raise ValueError("cover_images must be a list of bytes")
            images = [bytes(image) for image in cast(Iterable[bytes], value)]
            if images:
                result[field_id] = images
        elif field_id is FieldId.CUSTOM_TEXT:
            if not isinstance(value, Mapping):
                raise ValueError("custom_text must be a mapping")
            custom = {
                str(desc): str(text)
                for desc, text in cast(Mapping[object, object], value).items()
                if text is not None and str(text) != ""
            }
            if custom:
                result[field_id] = custom
        else:
            if value is None:
                continue
            text = str(value)
            if text.strip():
                result[field_id] = text
    return result


class TrackRecord:
    """One audio file and its curated fields.

    Setters remember which fields and custom text keys actually changed, so
    write-back only touches what a review decision modified.
    """

    __slots__ = ("_path", "fields", "_changed", "_changed_custom")

    def __init__(self, path: Path | str, fields: FieldMap | None = None) -> None:
        self._path: Path = Path(path)
        self.fields: FieldMap = dict(fields or {})
        self._changed: set[FieldId] = set()
        self._changed_custom: set[str] = set()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def folder(self) -> Path:
        return self._path.parent

    def text(self, field_id: FieldId) -> str | None:
        """Return a text field, or ``None`` when absent."""

        value = self.fields.get(field_id)
        return value if isinstance(value, str) else None

    def set_text(self, field_id: FieldId, value: str | None) -> None:
        """Set a text field; ``None`` or blank removes it."""

        if field_id not in TEXT_FIELDS:
            raise ValueError(f"{field_id} is not a text field")
        previous = self.text(field_id)
        if value is None or not value.strip():
            _ = self.fields.pop(field_id, None)
        else:
            self.fields[field_id] = value
        if self.text(field_id) != previous:
            self._changed.add(field_id)

    @property
    def cover_images(self) -> list[bytes]:
        value = self.fields.get(FieldId.COVER_IMAGES)
        return list(cast(list[bytes], value)) if isinstance(value, list) else []

    def set_cover_images(self, images: Iterable[bytes]) -> None:
        stored = list(images)
        if stored != self.cover_images:
            self._changed.add(FieldId.COVER_IMAGES)
        if stored:
            self.fields[FieldId.COVER_IMAGES] = stored
        else:
            _ = self.fields.pop(FieldId.COVER_IMAGES, None)

    @property
    def custom_text(self) -> dict[str, str]:
        value = self.fields.get(FieldId.CUSTOM_TEXT)
        return dict(cast(dict[str, str], value)) if isinstance(value, dict) else {}

    def custom(self, key: str) -> str | None:
        return self.custom_text.get(key)

    def set_custom(self, key: str, value: str | None) -> None:
        """Set or delete one custom text entry."""

        custom = self.custom_text
        previous = custom.get(key)
        if value is None or value == "":
            _ = custom.pop(key, None)
        else:
            custom[key] = value
        if custom.get(key) != previous:
            self._changed_custom.add(key)
        if custom:
            self.fields[FieldId.CUSTOM_TEXT] = custom
        else:
            _ = self.fields.pop(FieldId.CUSTOM_TEXT, None)

    @property
    def is_compilation(self) -> bool:
        return self.custom(COMPILATION_KEY) == COMPILATION_VALUE

    @property
    def changes(self) -> FieldChanges:
        """Fields and custom keys modified since loading or the last write."""

        return FieldChanges(frozenset(self._changed), frozenset(self._changed_custom))

    @property
    def is_dirty(self) -> bool:
        return bool(self._changed or self._changed_custom)

    def mark_clean(self) -> None:
        self._changed.clear()
        self._changed_custom.clear()

    def mark_changes_against(self, baseline: FieldMap) -> None:
        """Flag every field that differs from ``baseline`` (tags as found on disk)."""

        for field_id in (*TEXT_FIELDS, FieldId.COVER_IMAGES):
            if self.fields.get(field_id) != baseline.get(field_id):
                self._changed.add(field_id)
        ours = self.custom_text
        raw = baseline.get(FieldId.CUSTOM_TEXT)
        theirs = cast(dict[str, str], raw) if isinstance(raw, dict) else {}
        for key in ours.keys() | theirs.keys():
            if ours.get(key) != theirs.get(key):
                self._changed_custom.add(key)

    def field_map(self) -> FieldMap:
        """Return a detached copy of the stored fields."""

        copy: FieldMap = {}
        for key, value in self.fields.items():
            if isinstance(value, list):
                copy[key] = list(value)
            elif isinstance(value, dict):
                copy[key] = dict(value)
            else:
                copy[key] = value
        return copy

    def __repr__(self) -> str:
        return f"TrackRecord(path={str(self._path)!r}, fields={sorted(self.fields)!r})"


class TrackStore:
    """Ordered collection of track records with unique paths."""

    def __init__(self, records: Iterable[TrackRecord] = ()) -> None:
        self._records: list[TrackRecord] = []
        self._by_path: dict[Path, TrackRecord] = {}
        for record in records:
            self.add(record)

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[Path | str, Mapping[str, object]]]) -> "TrackStore":
        """Build a store from ``(path, field-map)`` pairs in the given order."""

        return cls(TrackRecord(path, coerce_field_map(raw)) for path, raw in entries)

    def add(self, record: TrackRecord) -> None:
        if record.path in self._by_path:
            raise DuplicatePathError(record.path)
        self._records.append(record)
        self._by_path[record.path] = record

    def get(self, path: Path | str) -> TrackRecord | None:
        return self._by_path.get(Path(path))

    def dirty_records(self) -> list[TrackRecord]:
        """Records with at least one changed field, in insertion order."""

        return [record for record in self._records if record.is_dirty]

    def entries(self) -> list[tuple[Path, FieldMap]]:
        """Return ``(path, field-map)`` pairs in insertion order."""

        return [(record.path, record.field_map()) for record in self._records]

    def __iter__(self) -> Iterator[TrackRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path) in self._by_path


__all__ = [
    "COMPILATION_KEY",
    "COMPILATION_VALUE",
    "DuplicatePathError",
    "FieldChanges",
    "FieldId",
    "FieldMap",
    "FieldValue",
    "TEXT_FIELDS",
    "TrackRecord",
    "TrackStore",
    "VARIOUS_ARTISTS",
    "coerce_field_map",
]
