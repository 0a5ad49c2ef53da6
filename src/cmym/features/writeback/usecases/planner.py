"""Summary: Plan the terminal rename phase from curated tags.
Why: Every destination is known and grouped by folder before anything moves.
"""

from __future__ import annotations

import re
from pathlib import Path

from cmym.config.settings import RENAME_TEMPLATE
from cmym.features.writeback.domain import FolderBatch, RenameMove, Sanitizer
from cmym.shared.track_store import FieldId, TrackRecord, TrackStore

_LEADING_NUMBER = re.compile(r"^\s*(\d+)")

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
UNKNOWN_TITLE = "Unknown Title"


def _number(value: str | None) -> int:
    matched = _LEADING_NUMBER.match(value or "")
    return int(matched.group(1)) if matched else 0


def template_values(record: TrackRecord) -> dict[str, str | int]:
    """Sanitized values available to the rename template."""

    artist = record.text(FieldId.ARTIST)
    album_artist = record.text(FieldId.ALBUM_ARTIST) or artist
    title = record.text(FieldId.TITLE) or record.path.stem
    return {
        "album_artist": Sanitizer.sanitize_component(album_artist, UNKNOWN_ARTIST),
        "artist": Sanitizer.sanitize_component(artist, UNKNOWN_ARTIST),
        "album": Sanitizer.sanitize_component(record.text(FieldId.ALBUM), UNKNOWN_ALBUM),
        "title": Sanitizer.sanitize_component(title, UNKNOWN_TITLE),
        "year": Sanitizer.sanitize_component(record.text(FieldId.YEAR)),
        "track": _number(record.text(FieldId.TRACK)),
        "disc": _number(record.text(FieldId.DISC)),
        "ext": record.path.suffix.lower(),
    }


def render_destination(record: TrackRecord, root: Path, template: str = RENAME_TEMPLATE) -> Path:
    """Destination of ``record`` under ``root``.

    Raises:
        ValueError: If the template names an unknown field or is malformed.
    """

    try:
        rendered = template.format(**template_values(record))
    except (KeyError, IndexError) as exc:
        raise ValueError(f"Invalid rename template {template!r}: unknown field {exc}") from exc

    parts = [part.strip() for part in rendered.split("/") if part.strip()]
    if not parts:
        raise ValueError(f"Rename template {template!r} produced an empty path")
    return root.joinpath(*parts)


def plan_renames(store: TrackStore, root: Path, template: str = RENAME_TEMPLATE) -> list[FolderBatch]:
    """Group the destination of every record by destination folder."""

    batches: dict[Path, FolderBatch] = {}
    for record in store:
        destination = render_destination(record, root, template)
        batch = batches.setdefault(destination.parent, FolderBatch(folder=destination.parent))
        batch.moves.append(RenameMove(source=record.path, destination=destination))
    return list(batches.values())


__all__ = [
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "UNKNOWN_TITLE",
    "plan_renames",
    "render_destination",
    "template_values",
]
