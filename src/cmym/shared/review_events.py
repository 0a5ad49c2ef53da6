# Where: cmym.shared.review_events
# What: Structured event identifiers attached to log records.
# Why: Let the console handler style review, loudness and rename logs uniformly.

from enum import StrEnum


class ReviewEvent(StrEnum):
    """Structured event identifiers for review session logs."""

    STAGE_ENTER = "review.stage.enter"
    STAGE_SKIP = "review.stage.skip"
    STAGE_COMMIT = "review.stage.commit"
    GROUP_DECISION = "review.group.decision"
    SESSION_COMMIT = "review.session.commit"
    GAIN_JOB_SUBMIT = "loudness.job.submit"
    GAIN_JOB_COMPLETE = "loudness.job.complete"
    GAIN_JOB_ERROR = "loudness.job.error"
    GAIN_UNAVAILABLE = "loudness.unavailable"
    COVER_SOURCE_ERROR = "coverart.source.error"
    RENAME_CONFLICT = "writeback.rename.conflict"
    RENAME_MOVE = "writeback.rename.move"


__all__ = ["ReviewEvent"]
