"""Where: src/cmym/platform/itunes/client.py
What: HTTP adapter for the iTunes search API and artwork downloads.
Why: Keep network concerns out of the cover-art stage.
"""

from __future__ import annotations

from typing import Any, Protocol, cast

import requests

from cmym.config.settings import COVER_ART_SEARCH_URL, COVER_ART_TIMEOUT
from cmym.platform.logging import logger

ARTWORK_THUMBNAIL_TOKEN = "100x100bb"
ARTWORK_FULL_TOKEN = "600x600bb"

# Albums requested per search; every result costs one artwork download.
DEFAULT_SEARCH_LIMIT = 10


class ArtworkClient(Protocol):
    """Protocol for clients able to look up and download album artwork."""

    def search_artwork(self, term: str) -> list[str]:
        ...

    def fetch_image(self, url: str) -> bytes:
        ...


def upgrade_artwork_url(url: str) -> str:
    """Return the higher-resolution variant of an iTunes thumbnail URL."""

    return url.replace(ARTWORK_THUMBNAIL_TOKEN, ARTWORK_FULL_TOKEN)


class ITunesArtworkClient:
    """Search albums on iTunes and download their artwork with ``requests``.

    Failures surface as ``requests.RequestException`` or ``ValueError`` so
    callers decide whether a missing source matters.
    """

    def __init__(
        self,
        search_url: str = COVER_ART_SEARCH_URL,
        timeout: float = COVER_ART_TIMEOUT,
        session: requests.Session | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self._search_url: str = search_url
        self._timeout: float = timeout
        self._session: requests.Session = session or requests.Session()
        self._limit: int = limit

    def search_artwork(self, term: str) -> list[str]:
        """Return artwork URLs of albums matching ``term``, best first."""

        response = self._session.get(
            self._search_url,
            params={"term": term, "entity": "album", "media": "music", "limit": self._limit},
            timeout=self._timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected iTunes search payload")

        urls: list[str] = []
        results = cast(dict[str, Any], payload).get("results") or []
        for result in cast(list[Any], results):
            if not isinstance(result, dict):
                continue
            artwork = cast(dict[str, Any], result).get("artworkUrl100")
            if isinstance(artwork, str) and artwork:
                url = upgrade_artwork_url(artwork)
                if url not in urls:
                    urls.append(url)
        logger.debug("iTunes search %r returned %d artwork URL(s)", term, len(urls))
        return urls

    def fetch_image(self, url: str) -> bytes:
        """Download ``url`` and return its bytes.

        Raises:
            ValueError: If the response is not an image.
        """

        response = self._session.get(url, timeout=self._timeout)
        response.raise_for_status()
        content_type = str(response.headers.get("Content-Type", ""))
        if not content_type.startswith("image/"):
            raise ValueError(f"Not an image ({content_type or 'no content type'}): {url}")
        return response.content


__all__ = [
    "ARTWORK_FULL_TOKEN",
    "ARTWORK_THUMBNAIL_TOKEN",
    "ArtworkClient",
    "DEFAULT_SEARCH_LIMIT",
    "ITunesArtworkClient",
    "upgrade_artwork_url",
]
