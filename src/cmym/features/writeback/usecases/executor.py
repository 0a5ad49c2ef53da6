"""Summary: Apply a rename plan folder by folder.
Why: A folder with any conflicting destination is skipped whole, never half moved.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Sequence
from pathlib import Path

from cmym.features.writeback.domain import FolderBatch, RenameReport
from cmym.platform.filesystem import ensure_directory, remove_empty_directories
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import TrackRecord, TrackStore

ConflictHandler = Callable[[FolderBatch, list[str]], None]


def execute_renames(
    batches: Sequence[FolderBatch],
    on_conflict: ConflictHandler | None = None,
) -> RenameReport:
    """Move every file of every conflict-free batch.

    All batches are checked before the first move. Conflicting batches are
    reported through ``on_conflict`` and skipped.
    """

    report = RenameReport()
    safe: list[FolderBatch] = []
    for batch in batches:
        reasons = batch.conflicts()
        if not reasons:
            safe.append(batch)
            continue
        report.skipped.append(batch)
        logger.warning(
            "Skipping folder %s: %s",
            batch.folder,
            "; ".join(reasons),
            extra={"review_event": ReviewEvent.RENAME_CONFLICT},
        )
        if on_conflict is not None:
            on_conflict(batch, reasons)

    emptied: set[Path] = set()
    for batch in safe:
        for move in batch.moves:
            if move.is_noop:
                continue
            try:
                _ = ensure_directory(move.destination.parent)
                _ = shutil.move(str(move.source), str(move.destination))
            except OSError as exc:
                report.failed[move.source] = str(exc)
                logger.error("Failed to move %s: %s", move.source, exc)
                continue
            report.moved[move.source] = move.destination
            emptied.add(move.source.parent)
            logger.info(
                "Moved to %s",
                move.destination,
                extra={"review_event": ReviewEvent.RENAME_MOVE, "path": str(move.source)},
            )

    for folder in sorted(emptied, reverse=True):
        remove_empty_directories(folder)
    return report


def relocate(store: TrackStore, moved: dict[Path, Path]) -> TrackStore:
    """Copy of ``store`` with moved records carrying their new paths."""

    return TrackStore(
        TrackRecord(moved.get(path, path), fields) for path, fields in store.entries()
    )


__all__ = ["ConflictHandler", "execute_renames", "relocate"]
