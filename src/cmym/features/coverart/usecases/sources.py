"""Summary: Candidate image sources for one cover-art group.
Why: Each source may fail on its own without costing the others their images.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import requests

from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import FieldId, TrackRecord

from .ports import RemoteArtworkPort

FOLDER_IMAGE_SUFFIXES: tuple[str, ...] = (".jpg", ".jpeg", ".png")

# Failures that cost a source its images but never the group.
SOURCE_ERRORS: tuple[type[Exception], ...] = (requests.RequestException, OSError, ValueError)


def embedded_images(members: Sequence[TrackRecord]) -> list[bytes]:
    """Images already stored on the members, in member order."""

    images: list[bytes] = []
    for member in members:
        images.extend(member.cover_images)
    return images


def folder_images(members: Sequence[TrackRecord]) -> list[bytes]:
    """Image files sitting next to the members, sorted by name per folder."""

    images: list[bytes] = []
    folders: list[Path] = []
    for member in members:
        if member.folder not in folders:
            folders.append(member.folder)
    for folder in folders:
        if not folder.is_dir():
            continue
        for candidate in sorted(folder.iterdir()):
            if candidate.is_file() and candidate.suffix.lower() in FOLDER_IMAGE_SUFFIXES:
                images.append(candidate.read_bytes())
    return images


def search_term(members: Sequence[TrackRecord]) -> str | None:
    """``"artist album"`` lookup text, or ``None`` without an album title."""

    first = members[0]
    album = first.text(FieldId.ALBUM)
    if not album:
        return None
    artist = first.text(FieldId.ALBUM_ARTIST) or first.text(FieldId.ARTIST) or ""
    return f"{artist} {album}".strip()


def remote_images(remote: RemoteArtworkPort, members: Sequence[TrackRecord]) -> list[bytes]:
    """Download every artwork the remote search offers for the group."""

    term = search_term(members)
    if term is None:
        return []
    return [remote.fetch_image(url) for url in remote.search_artwork(term)]


def collect_images(
    sources: Sequence[tuple[str, Callable[[], list[bytes]]]],
) -> list[bytes]:
    """Concatenate the output of ``sources``; a failing source contributes nothing."""

    images: list[bytes] = []
    for name, source in sources:
        try:
            images.extend(source())
        except SOURCE_ERRORS as exc:
            logger.warning(
                "Cover source %s failed: %s",
                name,
                exc,
                extra={"review_event": ReviewEvent.COVER_SOURCE_ERROR},
            )
    return images


__all__ = [
    "FOLDER_IMAGE_SUFFIXES",
    "SOURCE_ERRORS",
    "collect_images",
    "embedded_images",
    "folder_images",
    "remote_images",
    "search_term",
]
