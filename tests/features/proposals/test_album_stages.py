"""Summary: Album-level suggestion rules and their decision application.
Why: Album artist, title, year and compilation proposals drive most corrections.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pytest_mock import MockerFixture

from cmym.features.proposals.usecases.stages import (
    AlbumArtistStage,
    AlbumTitleStage,
    AlbumYearStage,
    CompilationStage,
)
from cmym.shared.track_store import COMPILATION_KEY, FieldId, TrackStore

StoreFactory = Callable[..., TrackStore]


def test_album_artist_from_single_track_artist(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "F/01.mp3": {"artist": "pink floyd"},
            "F/02.mp3": {"artist": "pink floyd"},
        }
    )
    stage = AlbumArtistStage()

    groups = stage.compute(store)

    assert len(groups) == 1
    group = groups[0]
    assert group.old_value is None
    assert group.suggested_value == "Pink Floyd"

    group.accept()
    assert stage.commit(store, groups) == 1
    assert [record.text(FieldId.ALBUM_ARTIST) for record in store] == ["Pink Floyd", "Pink Floyd"]


def test_album_artist_with_several_track_artists_has_no_suggestion(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "F/01.mp3": {"artist": "Alice"},
            "F/02.mp3": {"artist": "Bob"},
        }
    )

    groups = AlbumArtistStage().compute(store)

    assert len(groups) == 1
    assert groups[0].suggested_value is None


def test_album_artist_single_artist_alice(make_store: StoreFactory) -> None:
    store = make_store({"F/01.mp3": {"artist": "Alice"}, "F/02.mp3": {"artist": "Alice"}})

    groups = AlbumArtistStage().compute(store)

    assert groups[0].suggested_value == "Alice"


def test_album_artist_various_artists_is_kept(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "F/01.mp3": {"album_artist": "Various Artists", "artist": "Alice"},
            "F/02.mp3": {"album_artist": "Various Artists", "artist": "Bob"},
        }
    )

    group = AlbumArtistStage().compute(store)[0]

    assert group.suggested_value == "Various Artists"
    assert group.is_satisfied


def test_album_artist_edit_backfills_matching_track_artists(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "F/01.mp3": {"album_artist": "the beatles", "artist": "the beatles"},
            "F/02.mp3": {"album_artist": "the beatles", "artist": "Billy Preston"},
        }
    )
    stage = AlbumArtistStage()
    groups = stage.compute(store)

    assert stage.edit(groups[0], "the beatles remastered")
    _ = stage.commit(store, groups)

    first, second = list(store)
    assert first.text(FieldId.ALBUM_ARTIST) == "The Beatles Remastered"
    assert first.text(FieldId.ARTIST) == "The Beatles Remastered"
    assert second.text(FieldId.ARTIST) == "Billy Preston"


def test_album_artist_clear_does_not_touch_track_artists(make_store: StoreFactory) -> None:
    store = make_store({"F/01.mp3": {"album_artist": "Queen", "artist": "Queen"}})
    stage = AlbumArtistStage()
    groups = stage.compute(store)

    groups[0].clear()
    _ = stage.commit(store, groups)

    record = next(iter(store))
    assert record.text(FieldId.ALBUM_ARTIST) is None
    assert record.text(FieldId.ARTIST) == "Queen"


def test_album_title_groups_sorted_and_nullable_only_for_singles(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "B/01.mp3": {"album_artist": "Zed", "album": "zoo station"},
            "A/01.mp3": {"album_artist": "Abba", "album": "arrival"},
            "S/single.mp3": {"artist": "Solo"},
        }
    )

    groups = AlbumTitleStage().compute(store)

    assert [group.key[0] for group in groups] == ["", "Abba", "Zed"]
    single, arrival, zoo = groups
    assert single.suggested_value is None
    assert single.can_be_empty
    assert arrival.suggested_value == "Arrival"
    assert not arrival.can_be_empty
    assert zoo.suggested_value == "Zoo Station"


def test_album_year_uses_year_field_then_folder(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "Early 1965/01.mp3": {"album": "Early", "year": "reissue 2001"},
            "Later 1988/01.mp3": {"album": "Later"},
            "Nothing/01.mp3": {"album": "Nothing"},
            "Single/01.mp3": {"title": "No album"},
        }
    )

    groups = {group.key[1]: group for group in AlbumYearStage().compute(store)}

    assert set(groups) == {"Early", "Later", "Nothing"}
    assert groups["Early"].suggested_value == "2001"
    assert groups["Later"].suggested_value == "1988"
    assert groups["Nothing"].suggested_value is None


def test_album_year_historical_field_wins(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "Live 1999/01.mp3": {"album": "Live", "custom_text": {"ORIGINALYEAR": "1971"}},
            "Live 1999/02.mp3": {"album": "Live", "custom_text": {"ORIGINALYEAR": "1971"}},
        }
    )

    groups = AlbumYearStage().compute(store)

    assert len(groups) == 1
    assert groups[0].suggested_value == "1971"


def test_compilation_only_for_albums_without_album_artist(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "Mix/01.mp3": {"album": "Mix", "artist": "Alice"},
            "Mix/02.mp3": {"album": "Mix", "artist": "Bob"},
            "Solo/01.mp3": {"album": "Solo", "album_artist": "Carol", "artist": "Carol"},
            "Same/01.mp3": {"album": "Same", "artist": "Dave"},
            "Same/02.mp3": {"album": "Same", "artist": "Dave"},
        }
    )
    stage = CompilationStage()

    groups = {group.key[0]: group for group in stage.compute(store)}

    assert set(groups) == {"Mix", "Same"}
    assert groups["Mix"].suggested_value == "yes"
    assert groups["Mix"].old_value is None
    assert groups["Same"].suggested_value is None

    groups["Mix"].accept()
    _ = stage.commit(store, list(groups.values()))
    mix = [record for record in store if record.text(FieldId.ALBUM) == "Mix"]
    assert all(record.custom(COMPILATION_KEY) == "1" for record in mix)


def test_compilation_marked_album_reports_yes_and_edit_no_clears(make_store: StoreFactory) -> None:
    store = make_store(
        {
            "Hits/01.mp3": {
                "album": "Hits",
                "album_artist": "Various Artists",
                "artist": "Alice",
                "custom_text": {COMPILATION_KEY: "1"},
            },
            "Hits/02.mp3": {
                "album": "Hits",
                "album_artist": "Various Artists",
                "artist": "Bob",
                "custom_text": {COMPILATION_KEY: "1"},
            },
        }
    )
    stage = CompilationStage()
    groups = stage.compute(store)

    assert groups[0].old_value == "yes"
    assert groups[0].is_satisfied

    assert stage.edit(groups[0], "no")
    _ = stage.commit(store, groups)
    assert not any(record.is_compilation for record in store)


def test_rule_failure_degrades_to_no_suggestion(make_store: StoreFactory, mocker: MockerFixture) -> None:
    store = make_store({"F/01.mp3": {"album_artist": "queen"}})
    stage = AlbumArtistStage()
    _ = mocker.patch.object(stage, "suggest", side_effect=KeyError("broken"))

    groups = stage.compute(store)

    assert len(groups) == 1
    assert groups[0].suggested_value is None


def test_context_lists_folder_and_track_count(make_store: StoreFactory) -> None:
    store: TrackStore = make_store({"F/01.mp3": {"artist": "Alice", "album": "A"}})

    group = AlbumArtistStage().compute(store)[0]

    context = dict(group.context)
    assert context["Folder"] == str(Path("F"))
    assert context["Tracks"] == "1"
    assert context["Album"] == "A"
    assert context["Track artists"] == "Alice"
