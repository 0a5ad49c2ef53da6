"""Application service running a review from disk to disk."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import final

from cmym.config.settings import COVER_ART_REMOTE, RENAME_TEMPLATE
from cmym.features.coverart import CoverArtStage, ImagePreviewPort, NullPreview
from cmym.features.loudness import GainStage
from cmym.features.navigation import ReviewPort
from cmym.features.proposals import Stage, build_catalog
from cmym.features.writeback import (
    FolderBatch,
    RenameReport,
    execute_renames,
    plan_renames,
    relocate,
)
from cmym.platform.itunes import ITunesArtworkClient
from cmym.platform.logging import logger
from cmym.platform.snapshot import load_snapshot, save_snapshot
from cmym.platform.tags import TagCodecError, read_tags, scan_directory, write_store
from cmym.shared.track_store import TrackStore

from .session import ReviewSession, SessionOutcome


@dataclass(slots=True)
class ReviewRequest:
    """Parameters describing one review run."""

    music_root: Path
    snapshot_path: Path | None = None
    save_tags: bool = False
    rename_root: Path | None = None
    rename_template: str = RENAME_TEMPLATE
    stage_ids: list[str] | None = None
    remote_artwork: bool = COVER_ART_REMOTE


@dataclass(slots=True)
class ReviewSummary:
    """Outcome of a review run including write-back."""

    session: SessionOutcome
    track_count: int = 0
    written: int = 0
    write_failures: int = 0
    rename: RenameReport | None = None
    snapshot_path: Path | None = None
    skipped_folders: list[Path] = field(default_factory=list)


@final
class ReviewService:
    """Application façade: load tracks, review them, write them back."""

    def __init__(self, ui: ReviewPort, preview: ImagePreviewPort | None = None) -> None:
        self._ui: ReviewPort = ui
        self._preview: ImagePreviewPort = preview or NullPreview()

    def load(self, request: ReviewRequest) -> TrackStore:
        """Snapshot contents when one exists, otherwise the tags under the music root.

        Snapshot records are compared with the tags on disk so that values
        reviewed in an earlier run are still written back on save.
        """

        if request.snapshot_path is not None and request.snapshot_path.exists():
            store = load_snapshot(request.snapshot_path)
            for record in store:
                if not record.path.exists():
                    logger.warning("Snapshot entry %s no longer exists on disk", record.path)
                    continue
                try:
                    record.mark_changes_against(read_tags(record.path))
                except TagCodecError as exc:
                    logger.warning("Cannot compare snapshot entry with disk: %s", exc)
            return store
        return scan_directory(request.music_root)

    def stages(self, request: ReviewRequest) -> list[Stage]:
        remote = ITunesArtworkClient() if request.remote_artwork else None
        extra: Sequence[Stage] = (
            CoverArtStage(remote=remote, preview=self._preview),
            GainStage(),
        )
        return build_catalog(extra, only=request.stage_ids)

    def run(self, request: ReviewRequest, store: TrackStore | None = None) -> ReviewSummary:
        """Review ``store`` (loaded from ``request`` when omitted) and write back."""

        store = store if store is not None else self.load(request)
        outcome = ReviewSession(store, self.stages(request), self._ui).run()
        summary = ReviewSummary(session=outcome, track_count=len(store))

        if request.save_tags:
            summary.written, summary.write_failures = write_store(store)
            logger.info("Wrote tags of %d track(s), %d failed", summary.written, summary.write_failures)

        if request.rename_root is not None:
            summary.rename = execute_renames(
                plan_renames(store, request.rename_root, request.rename_template),
                on_conflict=self._report_conflict,
            )
            summary.skipped_folders = [batch.folder for batch in summary.rename.skipped]
            store = relocate(store, summary.rename.moved)

        if request.snapshot_path is not None:
            save_snapshot(store, request.snapshot_path)
            summary.snapshot_path = request.snapshot_path
        return summary

    def _report_conflict(self, batch: FolderBatch, reasons: list[str]) -> None:
        self._ui.notify(f"Skipping folder {batch.folder}: {'; '.join(reasons)}")


__all__ = ["ReviewRequest", "ReviewService", "ReviewSummary"]
