"""Summary: Analysis jobs and their outcomes.
Why: Correlate asynchronous completions back to the tracks that were analysed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cmym.shared.track_store import TrackRecord

from .report import JobReport


@dataclass(frozen=True, slots=True)
class GainJob:
    """One album (or a single treated as a one-track album) to analyse."""

    job_id: int
    members: tuple[TrackRecord, ...]
    album_scope: bool
    label: str = ""

    @property
    def paths(self) -> list[Path]:
        return [member.path for member in self.members]


@dataclass(slots=True)
class JobContext:
    """Scratch copies and report location of an in-flight job."""

    job: GainJob
    scratch: Path
    copies: list[Path] = field(default_factory=list)
    report_path: Path | None = None


@dataclass(frozen=True, slots=True)
class GainOutcome:
    """Completed job with either a parsed report or the reason it failed."""

    job: GainJob
    report: JobReport | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.report is not None


__all__ = ["GainJob", "GainOutcome", "JobContext"]
