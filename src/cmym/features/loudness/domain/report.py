"""Summary: Parse the tab-separated loudness report of one analysis job.
Why: Reports are written by an external program and must be validated before any tag changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# Peak column is an integer sample where 2**15 - 1 is full scale.
PEAK_FULL_SCALE: Final[int] = 32767

TRACK_GAIN_KEY: Final[str] = "replaygain_track_gain"
TRACK_PEAK_KEY: Final[str] = "replaygain_track_peak"
ALBUM_GAIN_KEY: Final[str] = "replaygain_album_gain"
ALBUM_PEAK_KEY: Final[str] = "replaygain_album_peak"
GAIN_KEYS: Final[tuple[str, ...]] = (
    TRACK_GAIN_KEY,
    TRACK_PEAK_KEY,
    ALBUM_GAIN_KEY,
    ALBUM_PEAK_KEY,
)


class JobReportError(RuntimeError):
    """Raised when a job report is unreadable or does not match its job."""


@dataclass(frozen=True, slots=True)
class GainReading:
    """One report row: gain in dB and peak as a 0..1 fraction."""

    label: str
    gain: float
    peak: float

    def gain_text(self) -> str:
        return f"{self.gain:.2f} dB"

    def peak_text(self) -> str:
        return f"{self.peak:.6f}"


@dataclass(frozen=True, slots=True)
class JobReport:
    """Per-track readings in file order plus the album reading, if any."""

    tracks: tuple[GainReading, ...]
    album: GainReading | None = None

    def tag_values(self) -> list[dict[str, str]]:
        """Custom-text entries to store on each track, in file order."""

        values: list[dict[str, str]] = []
        for reading in self.tracks:
            entry = {
                TRACK_GAIN_KEY: reading.gain_text(),
                TRACK_PEAK_KEY: reading.peak_text(),
            }
            if self.album is not None:
                entry[ALBUM_GAIN_KEY] = self.album.gain_text()
                entry[ALBUM_PEAK_KEY] = self.album.peak_text()
            values.append(entry)
        return values


def _parse_row(columns: list[str]) -> GainReading:
    if len(columns) < 4:
        raise ValueError(f"expected 4 columns, got {len(columns)}")
    peak = int(float(columns[3]))
    return GainReading(label=columns[1], gain=float(columns[2]), peak=peak / PEAK_FULL_SCALE)


def _is_header(columns: list[str]) -> bool:
    try:
        _ = float(columns[2])
    except (IndexError, ValueError):
        return True
    return False


def parse_report(text: str, track_count: int, *, album_scope: bool) -> JobReport:
    """Parse a report for a job of ``track_count`` files.

    Rows are ``index, filename, gain, peak``. An optional header row is
    skipped. Album jobs end with one summary row for the whole album.

    Raises:
        JobReportError: If a row is malformed or the row count is wrong.
    """

    rows = [line.split("\t") for line in text.splitlines() if line.strip()]
    if rows and _is_header(rows[0]):
        rows = rows[1:]

    readings: list[GainReading] = []
    for number, columns in enumerate(rows, start=1):
        try:
            readings.append(_parse_row([column.strip() for column in columns]))
        except ValueError as exc:
            raise JobReportError(f"Malformed report row {number}: {exc}") from exc

    expected = track_count + 1 if album_scope else track_count
    if len(readings) != expected:
        raise JobReportError(
            f"Report has {len(readings)} row(s); expected {expected} for {track_count} track(s)"
        )
    if album_scope:
        return JobReport(tracks=tuple(readings[:-1]), album=readings[-1])
    return JobReport(tracks=tuple(readings))


__all__ = [
    "ALBUM_GAIN_KEY",
    "ALBUM_PEAK_KEY",
    "GAIN_KEYS",
    "GainReading",
    "JobReport",
    "JobReportError",
    "PEAK_FULL_SCALE",
    "TRACK_GAIN_KEY",
    "TRACK_PEAK_KEY",
    "parse_report",
]
