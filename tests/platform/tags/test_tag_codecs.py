"""Summary: Tag codec round trips and directory scanning.
Why: The review only sees field maps, so reading and writing must agree.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from mutagen.id3 import APIC, ID3, TIT2, TPE1, TXXX

from cmym.platform.tags import (
    TagCodecError,
    codec_for,
    iter_audio_files,
    read_tags,
    scan_directory,
    write_store,
    write_tags,
)
from cmym.platform.tags._values import format_number_pair, image_mime, parse_slash_separated
from cmym.shared.track_store import FieldId, FieldMap, TrackRecord

JPEG: bytes = b"\xff\xd8\xff\xe0" + bytes(64)
PNG: bytes = b"\x89PNG\r\n\x1a\n" + bytes(64)


def _blank_mp3(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(bytes(256))
    return path


@pytest.mark.parametrize(
    ("value", "expected"),
    [("3/12", (3, 12)), ("7", (7, None)), ("x/9", (None, 9)), ("", (None, None))],
)
def test_parse_slash_separated(value: str, expected: tuple[int | None, int | None]) -> None:
    assert parse_slash_separated(value) == expected


def test_number_pair_and_mime_helpers() -> None:
    assert format_number_pair(3, 12) == "3/12"
    assert format_number_pair(3, 0) == "3"
    assert format_number_pair(0, 12) is None
    assert image_mime(PNG) == "image/png"
    assert image_mime(JPEG) == "image/jpeg"


def test_mp3_round_trip(tmp_path: Path) -> None:
    path = _blank_mp3(tmp_path / "song.mp3")
    fields: FieldMap = {
        FieldId.ALBUM_ARTIST: "Pink Floyd",
        FieldId.ALBUM: "Animals",
        FieldId.DISC: "1/1",
        FieldId.TRACK: "3/5",
        FieldId.ARTIST: "Pink Floyd",
        FieldId.TITLE: "Dogs",
        FieldId.YEAR: "1977",
        FieldId.COVER_IMAGES: [JPEG, PNG],
        FieldId.CUSTOM_TEXT: {"COMPILATION": "1", "replaygain_track_gain": "-3.00 dB"},
    }

    write_tags(path, fields)
    loaded = read_tags(path)

    assert {key: value for key, value in loaded.items() if key is not FieldId.COVER_IMAGES} == {
        key: value for key, value in fields.items() if key is not FieldId.COVER_IMAGES
    }
    assert sorted(loaded[FieldId.COVER_IMAGES]) == sorted([JPEG, PNG])


def test_mp3_write_removes_missing_fields(tmp_path: Path) -> None:
    path = _blank_mp3(tmp_path / "song.mp3")
    write_tags(path, {FieldId.TITLE: "Dogs", FieldId.CUSTOM_TEXT: {"COMPILATION": "1"}})

    write_tags(path, {FieldId.ARTIST: "Pink Floyd"})

    assert read_tags(path) == {FieldId.ARTIST: "Pink Floyd"}


def test_unsupported_suffix_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(TagCodecError, match="unsupported file type .ogg"):
        _ = codec_for(tmp_path / "track.ogg")


def test_scan_skips_hidden_and_unreadable_files(tmp_path: Path) -> None:
    good = _blank_mp3(tmp_path / "Album" / "01.mp3")
    write_tags(good, {FieldId.TITLE: "One"})
    _ = _blank_mp3(tmp_path / ".trash" / "02.mp3")
    _ = (tmp_path / "Album" / "notes.txt").write_text("liner notes")
    _ = (tmp_path / "Album" / "broken.flac").write_bytes(b"not a flac file")

    assert iter_audio_files(tmp_path) == [tmp_path / "Album" / "01.mp3", tmp_path / "Album" / "broken.flac"]

    store = scan_directory(tmp_path)

    assert len(store) == 1
    record = store.get(good)
    assert record is not None
    assert record.text(FieldId.TITLE) == "One"


def test_write_store_counts_failures(tmp_path: Path) -> None:
    good = TrackRecord(_blank_mp3(tmp_path / "a.mp3"))
    good.set_text(FieldId.TITLE, "A")
    bad = TrackRecord(tmp_path / "b.ogg")
    bad.set_text(FieldId.TITLE, "B")

    assert write_store([good, bad]) == (1, 1)
    assert read_tags(good.path) == {FieldId.TITLE: "A"}
    assert not good.is_dirty
    assert bad.is_dirty


def test_unchanged_store_writes_nothing(tmp_path: Path) -> None:
    path = _blank_mp3(tmp_path / "Album" / "01.mp3")
    write_tags(path, {FieldId.TITLE: "One", FieldId.ARTIST: "Queen"})
    before = path.read_bytes()

    store = scan_directory(tmp_path)
    for record in store:
        record.set_text(FieldId.TITLE, "One")

    assert store.dirty_records() == []
    assert write_store(store) == (0, 0)
    assert path.read_bytes() == before


def test_write_store_touches_only_changed_frames(tmp_path: Path) -> None:
    path = _blank_mp3(tmp_path / "Album" / "01.mp3")
    tags = ID3()
    tags.add(TIT2(encoding=3, text=["one"]))
    tags.add(TPE1(encoding=3, text=["Queen"]))
    tags.add(TXXX(encoding=3, desc="GENRES", text=["Rock", "Pop"]))
    tags.add(APIC(encoding=3, mime="image/jpeg", type=4, desc="back", data=JPEG))
    tags.save(path)

    store = scan_directory(tmp_path)
    record = store.get(path)
    assert record is not None
    record.set_text(FieldId.TITLE, "One")

    assert write_store(store) == (1, 0)
    saved = ID3(path)
    assert saved["TIT2"].text == ["One"]
    assert saved["TPE1"].text == ["Queen"]
    assert saved["TXXX:GENRES"].text == ["Rock", "Pop"]
    assert [(frame.type, frame.desc) for frame in saved.getall("APIC")] == [(4, "back")]


def test_replaced_custom_key_keeps_the_others(tmp_path: Path) -> None:
    path = _blank_mp3(tmp_path / "01.mp3")
    tags = ID3()
    tags.add(TXXX(encoding=3, desc="GENRES", text=["Rock", "Pop"]))
    tags.add(TXXX(encoding=3, desc="replaygain_track_gain", text=["-1.00 dB"]))
    tags.save(path)
    record = TrackRecord(path, read_tags(path))

    record.set_custom("replaygain_track_gain", None)
    assert write_store([record]) == (1, 0)

    saved = ID3(path)
    assert saved.getall("TXXX:replaygain_track_gain") == []
    assert saved["TXXX:GENRES"].text == ["Rock", "Pop"]
