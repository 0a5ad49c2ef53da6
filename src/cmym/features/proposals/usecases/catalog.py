"""Summary: Fixed, ordered catalog of review stages.
Why: The navigator walks stages by index, so their order must be stable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .stages import (
    AlbumArtistStage,
    AlbumTitleStage,
    AlbumYearStage,
    CompilationStage,
    DiscNumberStage,
    Stage,
    TrackArtistStage,
    TrackNumberStage,
    TrackTitleStage,
)


class UnknownStageError(ValueError):
    """Raised when a stage id does not exist in the catalog."""


def text_stages() -> list[Stage]:
    """Fresh instances of every text-field stage in review order."""

    return [
        AlbumArtistStage(),
        AlbumTitleStage(),
        AlbumYearStage(),
        DiscNumberStage(),
        TrackNumberStage(),
        TrackArtistStage(),
        TrackTitleStage(),
        CompilationStage(),
    ]


def build_catalog(
    extra_stages: Iterable[Stage] = (),
    *,
    only: Sequence[str] | None = None,
) -> list[Stage]:
    """Text stages followed by ``extra_stages``, optionally restricted to ``only``.

    Raises:
        UnknownStageError: If ``only`` names a stage that does not exist.
    """

    catalog = [*text_stages(), *extra_stages]
    if not only:
        return catalog

    known = {stage.stage_id for stage in catalog}
    unknown = [stage_id for stage_id in only if stage_id not in known]
    if unknown:
        raise UnknownStageError(
            f"Unknown stage(s): {', '.join(unknown)}. Known stages: {', '.join(sorted(known))}"
        )
    wanted = set(only)
    return [stage for stage in catalog if stage.stage_id in wanted]


__all__ = ["UnknownStageError", "build_catalog", "text_stages"]
