"""Where: src/cmym/platform/snapshot/json_snapshot.py
What: Persist a track store as JSON keyed by path.
Why: Resume a review without re-reading every file's tags.
"""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any, cast

from cmym.config.file_ops import write_text_file
from cmym.platform.logging import logger
from cmym.shared.track_store import FieldId, FieldMap, TrackStore


class SnapshotError(RuntimeError):
    """Raised when a snapshot file cannot be read or parsed."""


def _encode_fields(fields: FieldMap) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for field_id, value in fields.items():
        if field_id is FieldId.COVER_IMAGES and isinstance(value, list):
            encoded[field_id.value] = [base64.b64encode(image).decode("ascii") for image in value]
        else:
            encoded[field_id.value] = value
    return encoded


def _decode_fields(raw: dict[str, Any]) -> dict[str, object]:
    decoded: dict[str, object] = dict(raw)
    images = raw.get(FieldId.COVER_IMAGES.value)
    if images is not None:
        if not isinstance(images, list):
            raise ValueError("cover_images must be a list")
        decoded[FieldId.COVER_IMAGES.value] = [
            base64.b64decode(str(image), validate=True) for image in cast(list[Any], images)
        ]
    return decoded


def save_snapshot(store: TrackStore, path: Path) -> None:
    """Write ``store`` to ``path`` as ``{path-string: field-map}``."""

    payload = {str(record_path): _encode_fields(fields) for record_path, fields in store.entries()}
    write_text_file(path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    logger.info("Saved snapshot of %d track(s) to %s", len(store), path)


def load_snapshot(path: Path) -> TrackStore:
    """Read a snapshot written by :func:`save_snapshot`.

    Raises:
        SnapshotError: If the file is missing, not JSON, or holds invalid fields.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot {path} must contain a JSON object")

    entries: list[tuple[str, dict[str, object]]] = []
    for record_path, raw in cast(dict[str, Any], payload).items():
        if not isinstance(raw, dict):
            raise SnapshotError(f"Entry for {record_path} must be an object")
        try:
            entries.append((record_path, _decode_fields(cast(dict[str, Any], raw))))
        except ValueError as exc:
            raise SnapshotError(f"Invalid entry for {record_path}: {exc}") from exc

    try:
        store = TrackStore.from_entries(entries)
    except ValueError as exc:
        raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc
    logger.info("Loaded snapshot of %d track(s) from %s", len(store), path)
    return store


__all__ = ["SnapshotError", "load_snapshot", "save_snapshot"]
