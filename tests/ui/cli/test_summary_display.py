"""Summary: End-of-run summary and stage listing output.
Why: The operator needs to see skipped folders and failures after a review.
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console

from cmym.application.services import ReviewSummary, SessionOutcome
from cmym.features.writeback import RenameReport
from cmym.ui.cli.commands import StagesCommand
from cmym.ui.cli.display import SummaryDisplay


def _console() -> Console:
    return Console(file=StringIO(), force_terminal=False, width=200)


def test_summary_reports_skips_and_failures() -> None:
    console = _console()
    summary = ReviewSummary(
        session=SessionOutcome(applied=4, stages_committed=2, cancelled=True),
        track_count=10,
        written=9,
        write_failures=1,
        rename=RenameReport(failed={Path("/m/a.mp3"): "permission denied"}),
        snapshot_path=Path("/tmp/snap.json"),
        skipped_folders=[Path("/lib/A/B")],
    )

    SummaryDisplay(console).show(summary)

    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "Review cancelled" in output
    assert "Decisions applied: 4" in output
    assert "Tags written: 9 (1 failed)" in output
    assert "Skipped folder: /lib/A/B" in output
    assert "Failed: /m/a.mp3: permission denied" in output
    assert "Snapshot: /tmp/snap.json" in output


def test_stages_command_lists_every_stage_in_order() -> None:
    console = _console()

    stages = StagesCommand(console).execute()

    assert [stage.stage_id for stage in stages][-2:] == ["cover-art", "replaygain"]
    output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "album-artist" in output
    assert "ReplayGain" in output
