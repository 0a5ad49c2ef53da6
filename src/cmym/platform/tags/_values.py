"""Tag value helpers.

Where: src/cmym/platform/tags/_values.py
What: Pure helpers shared by the format codecs.
Why: Keep number pair and image type handling identical across containers.
"""

from __future__ import annotations

from typing import Final

JPEG_MIME: Final[str] = "image/jpeg"
PNG_MIME: Final[str] = "image/png"

__all__ = [
    "JPEG_MIME",
    "PNG_MIME",
    "format_number_pair",
    "image_mime",
    "parse_slash_separated",
]


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total); either part is None when not numeric.
    """
    parts: list[str] = [part.strip() for part in value.split(sep="/")] if value else []
    num: int | None = int(parts[0]) if parts and parts[0].isdigit() else None
    total: int | None = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else None
    return num, total


def format_number_pair(num: int | None, total: int | None) -> str | None:
    """Render a (number, total) pair; zero or missing numbers are dropped."""
    if not num:
        return None
    return f"{num}/{total}" if total else str(num)


def image_mime(data: bytes) -> str:
    """MIME type for embedded artwork; anything not PNG is stored as JPEG."""
    return PNG_MIME if data.startswith(b"\x89PNG") else JPEG_MIME
