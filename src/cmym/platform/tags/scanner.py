"""Summary: Tag reading and writing entry points plus directory scanning.
Why: Build the track store from disk and persist it back after review.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from cmym.platform.logging import logger
from cmym.shared.track_store import FieldChanges, FieldMap, TrackRecord, TrackStore

from .codecs import FlacCodec, Mp3Codec, Mp4Codec, TagCodec, TagCodecError

_CODECS: tuple[TagCodec, ...] = (Mp3Codec(), Mp4Codec(), FlacCodec())

SUPPORTED_SUFFIXES: frozenset[str] = frozenset(
    suffix for codec in _CODECS for suffix in codec.SUFFIXES
)


def codec_for(path: Path) -> TagCodec:
    """Codec handling ``path`` by its extension.

    Raises:
        TagCodecError: If the extension is not supported.
    """

    suffix = path.suffix.lower()
    for codec in _CODECS:
        if suffix in codec.SUFFIXES:
            return codec
    raise TagCodecError(path, f"unsupported file type {suffix or '(none)'}")


def read_tags(path: Path) -> FieldMap:
    return codec_for(path).read(path)


def write_tags(path: Path, fields: FieldMap, changes: FieldChanges | None = None) -> None:
    codec_for(path).write(path, fields, changes)


def iter_audio_files(root: Path) -> list[Path]:
    """Supported files under ``root`` in sorted traversal order, hidden files excluded."""

    return [
        path
        for path in sorted(root.rglob("*"))
        if path.is_file()
        and path.suffix.lower() in SUPPORTED_SUFFIXES
        and not any(part.startswith(".") for part in path.relative_to(root).parts)
    ]


def scan_directory(root: Path) -> TrackStore:
    """Read every supported file under ``root``; unreadable files are skipped."""

    store = TrackStore()
    for path in iter_audio_files(root):
        try:
            fields = read_tags(path)
        except (TagCodecError, ValueError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
            continue
        store.add(TrackRecord(path, fields))
    logger.info("Loaded %d track(s) from %s", len(store), root)
    return store


def write_store(records: Iterable[TrackRecord]) -> tuple[int, int]:
    """Write the changed fields of dirty records; return ``(written, failed)`` counts.

    Records no decision touched are left alone on disk.
    """

    written = failed = 0
    for record in records:
        if not record.is_dirty:
            continue
        try:
            write_tags(record.path, record.field_map(), record.changes)
        except TagCodecError as exc:
            logger.error("Could not write tags: %s", exc)
            failed += 1
            continue
        record.mark_clean()
        written += 1
    return written, failed


__all__ = [
    "SUPPORTED_SUFFIXES",
    "codec_for",
    "iter_audio_files",
    "read_tags",
    "scan_directory",
    "write_store",
    "write_tags",
]
