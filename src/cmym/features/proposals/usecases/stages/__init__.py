# Path: `src/cmym/features/proposals/usecases/stages/__init__.py`
# Summary: Export the stage interface and the text-field stages.
# Why: The catalog and tests import stages from one place.

from .album import (
    COMPILATION_YES,
    AlbumArtistStage,
    AlbumTitleStage,
    AlbumYearStage,
    CompilationStage,
    find_year,
)
from .base import GroupKey, Stage, TextStage
from .tracks import (
    DiscNumberStage,
    TrackArtistStage,
    TrackNumberStage,
    TrackTitleStage,
    leading_number,
    title_from_filename,
)

__all__ = [
    "AlbumArtistStage",
    "AlbumTitleStage",
    "AlbumYearStage",
    "COMPILATION_YES",
    "CompilationStage",
    "DiscNumberStage",
    "GroupKey",
    "Stage",
    "TextStage",
    "TrackArtistStage",
    "TrackNumberStage",
    "TrackTitleStage",
    "find_year",
    "leading_number",
    "title_from_filename",
]
