"""Ports for the cover-art stage.

Where: features/coverart/usecases.
What: Protocols for remote artwork lookup and the image preview push target.
Why: Keep HTTP and preview transport out of the stage logic.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RemoteArtworkPort(Protocol):
    """Remote lookup of artwork by free-text search."""

    def search_artwork(self, term: str) -> list[str]:
        """Return candidate image URLs for ``term``."""
        ...

    def fetch_image(self, url: str) -> bytes:
        """Download one image."""
        ...


@runtime_checkable
class ImagePreviewPort(Protocol):
    """Push target showing the image currently under review."""

    def set(self, image: bytes | None) -> None:
        """Display ``image``; ``None`` blanks the preview."""
        ...


__all__ = ["ImagePreviewPort", "RemoteArtworkPort"]
