"""Cover-art preview adapters."""

from .preview import FilePreview, NullPreview

__all__ = ["FilePreview", "NullPreview"]
