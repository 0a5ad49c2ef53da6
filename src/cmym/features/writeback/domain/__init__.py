"""Rename plan structures and path sanitization."""

from .models import FolderBatch, RenameMove, RenameReport
from .sanitizer import Sanitizer

__all__ = ["FolderBatch", "RenameMove", "RenameReport", "Sanitizer"]
