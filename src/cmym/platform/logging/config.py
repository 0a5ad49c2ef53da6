"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Build the ``cmym`` logger with a Rich console and a rotating review log.
Why: Every review decision is traceable in the log file by its event tag.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final, override

from rich.console import Console

from cmym.config.paths import default_log_file

from .handlers import ReviewRichHandler

LOGGER_NAME: Final[str] = "cmym"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

LOG_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 3
FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s [%(review_event)s] %(message)s"


class ReviewEventFilter(logging.Filter):
    """Give every record a ``review_event`` attribute for the file format."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "review_event"):
            record.review_event = "-"
        return True


def _review_log_handler(log_file: Path, level: int) -> logging.Handler:
    target = log_file.expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.addFilter(ReviewEventFilter())
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the application logger.

    The console handler writes to stderr so prompts on stdout stay readable.
    Calling again replaces the handlers, which is how ``--verbose`` and
    ``--quiet`` take effect after import.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = ReviewRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        logger.addHandler(_review_log_handler(Path(log_file), file_level))

    return logger


logger: Final[logging.Logger] = setup_logger(log_file=DEFAULT_LOG_FILE)


__all__ = [
    "DEFAULT_LOG_FILE",
    "LOGGER_NAME",
    "ReviewEventFilter",
    "logger",
    "setup_logger",
]
