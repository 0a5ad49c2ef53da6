# Where: cmym.shared.__init__
# What: Provide a concise import surface for the shared track model.
# Why: Every feature slice reads and writes the same records.

"""Shared cross-cutting dataclasses exposed at the package level."""

from .review_events import ReviewEvent
from .track_store import (
    COMPILATION_KEY,
    COMPILATION_VALUE,
    VARIOUS_ARTISTS,
    DuplicatePathError,
    FieldChanges,
    FieldId,
    FieldMap,
    TrackRecord,
    TrackStore,
)

__all__ = [
    "COMPILATION_KEY",
    "COMPILATION_VALUE",
    "DuplicatePathError",
    "FieldChanges",
    "FieldId",
    "FieldMap",
    "ReviewEvent",
    "TrackRecord",
    "TrackStore",
    "VARIOUS_ARTISTS",
]
