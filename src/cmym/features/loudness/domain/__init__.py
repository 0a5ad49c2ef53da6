"""Loudness analysis domain: jobs, outcomes and report parsing."""

from .models import GainJob, GainOutcome, JobContext
from .report import (
    ALBUM_GAIN_KEY,
    ALBUM_PEAK_KEY,
    GAIN_KEYS,
    PEAK_FULL_SCALE,
    TRACK_GAIN_KEY,
    TRACK_PEAK_KEY,
    GainReading,
    JobReport,
    JobReportError,
    parse_report,
)

__all__ = [
    "ALBUM_GAIN_KEY",
    "ALBUM_PEAK_KEY",
    "GAIN_KEYS",
    "GainJob",
    "GainOutcome",
    "GainReading",
    "JobContext",
    "JobReport",
    "JobReportError",
    "PEAK_FULL_SCALE",
    "TRACK_GAIN_KEY",
    "TRACK_PEAK_KEY",
    "parse_report",
]
