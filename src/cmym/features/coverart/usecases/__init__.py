# Path: `src/cmym/features/coverart/usecases/__init__.py`
# Summary: Export the cover-art stage, its ports and image sources.
# Why: Session wiring only needs these entry points.

from .ports import ImagePreviewPort, RemoteArtworkPort
from .sources import collect_images, embedded_images, folder_images, remote_images, search_term
from .stage import CoverArtStage

__all__ = [
    "CoverArtStage",
    "ImagePreviewPort",
    "RemoteArtworkPort",
    "collect_images",
    "embedded_images",
    "folder_images",
    "remote_images",
    "search_term",
]
