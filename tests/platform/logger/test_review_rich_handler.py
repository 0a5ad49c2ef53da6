"""Tests for the ``ReviewRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from cmym.platform.logging import ReviewRichHandler


def _make_handler() -> ReviewRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return ReviewRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` carrying the given extras."""

    record = logging.LogRecord(
        name="cmym",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_review_event_gets_icon_and_message() -> None:
    handler = _make_handler()
    record = _build_record(review_event="review.stage.commit")

    rendered = handler.render_message(record, "Album artist: applied 2 decision(s)")

    assert isinstance(rendered, Text)
    assert rendered.plain == "✅ Album artist: applied 2 decision(s)"


def test_long_paths_are_truncated_to_trailing_segments() -> None:
    handler = _make_handler()
    record = _build_record(
        review_event="writeback.rename.move",
        path="/home/user/music/incoming/Queen/Jazz/01 Mustapha.mp3",
    )

    rendered = handler.render_message(record, "Moved")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("@ …/Queen/Jazz/01 Mustapha.mp3")


def test_unknown_event_uses_default_icon() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(review_event="something.else"), "hello")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith(" hello")
    assert rendered.plain != "hello"


def test_plain_records_fall_back_to_rich_rendering() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"


def test_bracketed_names_are_printed_verbatim() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "Skipping /music/[/bold] demos/01.mp3")

    assert isinstance(rendered, Text)
    assert rendered.plain == "Skipping /music/[/bold] demos/01.mp3"
