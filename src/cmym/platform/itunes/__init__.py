"""iTunes artwork search adapter."""

from .client import ArtworkClient, ITunesArtworkClient, upgrade_artwork_url

__all__ = ["ArtworkClient", "ITunesArtworkClient", "upgrade_artwork_url"]
