"""Rich console handler for review logs.

Where: platform/logging/handlers.py
What: Render structured review events with icons and compact paths.
Why: Keep console output readable while the operator works through stages.
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ReviewRichHandler(RichHandler):
    """Rich handler that decorates ``review_event`` records."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "review.stage.enter": ("🎚️", "cyan"),
        "review.stage.skip": ("⏭️", "yellow"),
        "review.stage.commit": ("✅", "green"),
        "review.group.decision": ("✏️", "blue"),
        "review.session.commit": ("💾", "green"),
        "loudness.job.submit": ("🚀", "cyan"),
        "loudness.job.complete": ("🎉", "green"),
        "loudness.job.error": ("⛔", "red"),
        "loudness.unavailable": ("ℹ️", "yellow"),
        "coverart.source.error": ("🖼️", "yellow"),
        "writeback.rename.conflict": ("❌", "red"),
        "writeback.rename.move": ("📦", "magenta"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        # Messages carry folder names and titles verbatim, never markup.
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, raw_path: str) -> Text:
        """Render the trailing path segments with highlighted separators."""

        parts = [part for part in PurePath(raw_path).parts if part and part != "/"]
        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT :]

        text = Text()
        if truncated:
            _ = text.append("…/", style=Style(color="magenta"))
        for index, part in enumerate(parts):
            if index:
                _ = text.append("/", style=Style(color="magenta"))
            _ = text.append(part, style=Style(color="white"))
        return text

    def _render_review_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render records tagged with a ``review_event`` extra."""

        event = getattr(record, "review_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        _ = text.append(message, style=Style(color=color))

        path = getattr(record, "path", None)
        if path:
            _ = text.append(" @ ")
            _ = text.append_text(self._format_path(str(path)))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for review events."""

        review_text = self._render_review_message(record, message)
        if review_text is not None:
            return review_text
        return super().render_message(record, message)


__all__ = ["ReviewRichHandler"]
