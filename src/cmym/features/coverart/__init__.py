# Path: `src/cmym/features/coverart/__init__.py`
# Summary: Cover-art review feature.
# Why: Group albums by their images and let the operator curate the artwork.

from .adapters import FilePreview, NullPreview
from .domain import CoverArtGroup, describe_image, image_digest
from .usecases import CoverArtStage, ImagePreviewPort, RemoteArtworkPort

__all__ = [
    "CoverArtGroup",
    "CoverArtStage",
    "FilePreview",
    "ImagePreviewPort",
    "NullPreview",
    "RemoteArtworkPort",
    "describe_image",
    "image_digest",
]
