"""Summary: Stage catalog ordering and selection by id.
Why: Navigation indexes stages, so the catalog order must stay fixed.
"""

from __future__ import annotations

import pytest

from cmym.features.proposals import UnknownStageError, build_catalog

TEXT_STAGE_IDS: list[str] = [
    "album-artist",
    "album-title",
    "album-year",
    "disc-number",
    "track-number",
    "track-artist",
    "track-title",
    "compilation",
]


def test_catalog_order_is_stable() -> None:
    assert [stage.stage_id for stage in build_catalog()] == TEXT_STAGE_IDS


def test_catalog_filter_keeps_catalog_order() -> None:
    stages = build_catalog(only=["track-title", "album-artist"])

    assert [stage.stage_id for stage in stages] == ["album-artist", "track-title"]


def test_unknown_stage_id_is_rejected() -> None:
    with pytest.raises(UnknownStageError, match="no-such-stage"):
        _ = build_catalog(only=["no-such-stage"])


def test_catalog_returns_fresh_instances() -> None:
    first = build_catalog()
    second = build_catalog()

    assert all(a is not b for a, b in zip(first, second, strict=True))
