"""Summary: Logger bootstrap and the review log file format.
Why: Decisions in the log file are found by their event tag.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from cmym.platform.logging import ReviewRichHandler, setup_logger
from cmym.shared.review_events import ReviewEvent


@pytest.fixture
def review_log(tmp_path: Path) -> Iterator[Path]:
    log_file = tmp_path / "logs" / "review.log"
    yield log_file
    _ = setup_logger(log_file=None)


def test_file_lines_carry_the_review_event(review_log: Path) -> None:
    logger = setup_logger(log_file=review_log, console_level=logging.CRITICAL)

    logger.info("Album artist: applied 2 decision(s)", extra={"review_event": ReviewEvent.STAGE_COMMIT})
    logger.debug("plain line")
    for handler in logger.handlers:
        handler.flush()

    lines = review_log.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("[review.stage.commit] Album artist: applied 2 decision(s)")
    assert lines[1].endswith("[-] plain line")


def test_setup_replaces_previous_handlers(review_log: Path) -> None:
    _ = setup_logger(log_file=review_log)
    logger = setup_logger(log_file=None, console_level=logging.WARNING)

    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, ReviewRichHandler)
    assert handler.level == logging.WARNING
