# Path: `src/cmym/features/coverart/domain/__init__.py`
# Summary: Export cover image helpers and the cover-art proposal group.
# Why: Stage, UI and tests share these pure helpers.

from .images import (
    dedupe_images,
    describe_image,
    image_digest,
    image_kind,
    images_fingerprint,
    summarize_images,
)
from .models import CoverArtGroup

__all__ = [
    "CoverArtGroup",
    "dedupe_images",
    "describe_image",
    "image_digest",
    "image_kind",
    "images_fingerprint",
    "summarize_images",
]
