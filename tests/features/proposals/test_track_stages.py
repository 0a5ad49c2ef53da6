"""Summary: Track-level suggestion rules for disc, number, artist and title.
Why: Per-file fields carry most of the filename-derived corrections.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from cmym.features.proposals.usecases.stages import (
    DiscNumberStage,
    TrackArtistStage,
    TrackNumberStage,
    TrackTitleStage,
    leading_number,
)
from cmym.shared.track_store import FieldId, TrackStore

StoreFactory = Callable[..., TrackStore]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("07", 7), ("3/12", 3), (" 12 ", 12), ("A1", None), ("", None), (None, None)],
)
def test_leading_number(value: str | None, expected: int | None) -> None:
    assert leading_number(value) == expected


def test_title_falls_back_to_file_name(make_store: StoreFactory) -> None:
    store = make_store({"Loose/03 - love song.mp3": {"artist": "Someone"}})

    groups = TrackTitleStage().compute(store)

    assert len(groups) == 1
    assert groups[0].old_value is None
    assert groups[0].suggested_value == "Love Song"
    assert groups[0].can_be_empty


def test_title_normalizes_existing_value_and_is_required_on_albums(make_store: StoreFactory) -> None:
    store = make_store({"A/01.mp3": {"album": "A", "title": "the end of the road"}})
    stage = TrackTitleStage()

    group = stage.compute(store)[0]

    assert group.suggested_value == "The End of the Road"
    assert not group.can_be_empty
    group.accept()
    _ = stage.commit(store, [group])
    assert next(iter(store)).text(FieldId.TITLE) == "The End of the Road"


def test_track_numbers_of_complete_album_are_left_alone(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "A/a.mp3": {"album": "A", "track": "2"},
            "A/b.mp3": {"album": "A", "track": "1"},
            "A/c.mp3": {"album": "A", "track": "3"},
        }
    )

    assert TrackNumberStage().compute(store) == []


def test_track_numbers_with_gap_are_offered_per_file(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "A/a.mp3": {"album": "A", "track": "01/12"},
            "A/b.mp3": {"album": "A", "track": "03/12"},
        }
    )
    stage = TrackNumberStage()

    groups = stage.compute(store)

    assert [group.suggested_value for group in groups] == ["1", "3"]
    assert all(not group.can_be_empty for group in groups)
    assert stage.transform("05 of 12") == "5"


def test_tracks_without_album_have_no_number_stage(make_store: StoreFactory) -> None:
    store = make_store({"S/song.mp3": {"track": "7"}})

    assert TrackNumberStage().compute(store) == []


def test_disc_numbers_from_folder_names_for_split_albums(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "Box/Disc 1/01.mp3": {"album": "Box", "album_artist": "X"},
            "Box/Disc 2/01.mp3": {"album": "Box", "album_artist": "X"},
            "Solo/01.mp3": {"album": "Solo", "album_artist": "X"},
        }
    )

    groups = {group.key[2]: group for group in DiscNumberStage().compute(store)}

    first = groups["Box/Disc 1"]
    second = groups["Box/Disc 2"]
    solo = groups["Solo"]
    assert (first.suggested_value, second.suggested_value) == ("1", "2")
    assert not first.can_be_empty
    assert solo.suggested_value is None
    assert solo.can_be_empty


def test_track_artist_skips_album_artist_matches(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "A/01.mp3": {"album": "A", "album_artist": "Queen", "artist": "Queen"},
            "A/02.mp3": {"album": "A", "album_artist": "Queen"},
            "A/03.mp3": {"album": "A", "album_artist": "Queen", "artist": "queen & bowie"},
            "A/04.mp3": {"album": "A", "album_artist": "Queen", "artist": "queen & bowie"},
        }
    )

    groups = TrackArtistStage().compute(store)

    assert len(groups) == 1
    assert len(groups[0].members) == 2
    assert groups[0].suggested_value == "Queen & Bowie"
    assert groups[0].can_be_empty


def test_track_artist_without_any_artist_is_per_file_and_required(make_store: StoreFactory) -> None:
    store = make_store({"L/01.mp3": {"title": "One"}, "L/02.mp3": {"title": "Two"}})

    groups = TrackArtistStage().compute(store)

    assert len(groups) == 2
    assert all(group.suggested_value is None for group in groups)
    assert all(not group.can_be_empty for group in groups)
    assert all(group.empties_forbidden_field for group in groups)
