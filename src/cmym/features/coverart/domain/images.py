"""Summary: Identify, describe and deduplicate cover images.
Why: Images from several sources are merged into one ordered list per album.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "jpeg"),
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
)


def image_digest(data: bytes) -> str:
    """Content hash used to detect duplicate images."""

    return hashlib.sha1(data).hexdigest()


def image_kind(data: bytes) -> str:
    """Short format name from the image signature, ``"unknown"`` otherwise."""

    for signature, kind in _SIGNATURES:
        if data.startswith(signature):
            return kind
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    return "unknown"


def describe_image(data: bytes) -> str:
    """Human readable one-liner such as ``"jpeg, 41.2 KiB"``."""

    return f"{image_kind(data)}, {len(data) / 1024:.1f} KiB"


def dedupe_images(images: Iterable[bytes]) -> list[bytes]:
    """Drop repeated images, keeping the first occurrence of each."""

    seen: set[str] = set()
    unique: list[bytes] = []
    for image in images:
        digest = image_digest(image)
        if digest in seen:
            continue
        seen.add(digest)
        unique.append(image)
    return unique


def images_fingerprint(images: Iterable[bytes]) -> str:
    """Order-sensitive fingerprint of an image list; empty for no images."""

    return ",".join(image_digest(image)[:12] for image in images)


def summarize_images(images: list[bytes]) -> str | None:
    """Text stand-in for an image list, ``None`` when there are none."""

    if not images:
        return None
    return f"{len(images)} image(s): " + ", ".join(image_kind(image) for image in images)


__all__ = [
    "dedupe_images",
    "describe_image",
    "image_digest",
    "image_kind",
    "images_fingerprint",
    "summarize_images",
]
