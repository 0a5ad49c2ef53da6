"""Summary: Parsing of tab-separated loudness reports.
Why: Tags may only change once a report matches its job exactly.
"""

from __future__ import annotations

import pytest

from cmym.features.loudness import JobReportError, parse_report
from cmym.features.loudness.domain import (
    ALBUM_GAIN_KEY,
    ALBUM_PEAK_KEY,
    TRACK_GAIN_KEY,
    TRACK_PEAK_KEY,
)

ALBUM_REPORT = (
    "File\tName\tGain\tPeak\n"
    "1\t001.mp3\t-3.5\t32767\n"
    "2\t002.mp3\t1.25\t16384\n"
    "\n"
    "3\tAlbum\t-2.1\t32767\n"
)


def test_album_report_yields_track_and_album_values() -> None:
    report = parse_report(ALBUM_REPORT, 2, album_scope=True)

    assert [reading.gain for reading in report.tracks] == [-3.5, 1.25]
    assert report.album is not None
    assert report.album.peak == pytest.approx(1.0)

    first, second = report.tag_values()
    assert first == {
        TRACK_GAIN_KEY: "-3.50 dB",
        TRACK_PEAK_KEY: "1.000000",
        ALBUM_GAIN_KEY: "-2.10 dB",
        ALBUM_PEAK_KEY: "1.000000",
    }
    assert second[TRACK_PEAK_KEY] == "0.500015"


def test_single_report_has_no_album_values() -> None:
    report = parse_report("1\tsong.mp3\t-6.0\t1000\n", 1, album_scope=False)

    assert report.album is None
    assert report.tag_values() == [{TRACK_GAIN_KEY: "-6.00 dB", TRACK_PEAK_KEY: "0.030519"}]


@pytest.mark.parametrize(
    ("text", "count", "album_scope"),
    [
        ("1\ta.mp3\t-1.0\t100\n", 1, True),
        ("1\ta.mp3\t-1.0\t100\n2\tb.mp3\t-1.0\t100\n", 1, False),
        ("", 1, False),
    ],
    ids=["missing-album-row", "extra-row", "empty"],
)
def test_row_count_must_match_job(text: str, count: int, album_scope: bool) -> None:
    with pytest.raises(JobReportError, match="expected"):
        _ = parse_report(text, count, album_scope=album_scope)


def test_malformed_row_is_rejected() -> None:
    with pytest.raises(JobReportError, match="Malformed report row 2"):
        _ = parse_report("1\ta.mp3\t-1.0\t100\n2\tb.mp3\t-1.0\n", 2, album_scope=False)
