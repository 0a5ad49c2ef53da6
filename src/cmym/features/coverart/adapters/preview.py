"""Summary: Preview adapters for the cover-art stage.
Why: Sessions without a viewer still need a push target; files serve an external viewer.
"""

from __future__ import annotations

from pathlib import Path

from cmym.platform.filesystem import ensure_parent_directory


class NullPreview:
    """Preview target that discards every image."""

    def set(self, image: bytes | None) -> None:
        del image


class FilePreview:
    """Write the current image to a fixed file for an external viewer."""

    def __init__(self, target: Path) -> None:
        self._target: Path = target

    @property
    def target(self) -> Path:
        return self._target

    def set(self, image: bytes | None) -> None:
        if image is None:
            self._target.unlink(missing_ok=True)
            return
        ensure_parent_directory(self._target)
        _ = self._target.write_bytes(image)


__all__ = ["FilePreview", "NullPreview"]
