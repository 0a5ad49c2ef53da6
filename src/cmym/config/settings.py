"""Where: src/cmym/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

import os

from cmym.config.config import (
    COVER_ART_SEARCH_URL_DEFAULT,
    COVER_ART_TIMEOUT_DEFAULT,
    GAIN_EXECUTABLE_DEFAULT,
    RENAME_TEMPLATE_DEFAULT,
    config as app_config,
)


def detected_core_count() -> int:
    """Return the number of usable cores, never less than one."""

    return max(1, os.cpu_count() or 1)


# Loudness analysis -----------------------------------------------------------

GAIN_EXECUTABLE: str = app_config.gain_executable or GAIN_EXECUTABLE_DEFAULT

_gain_workers = getattr(app_config, "gain_workers", 0)
GAIN_WORKERS: int = (
    _gain_workers
    if isinstance(_gain_workers, int) and _gain_workers > 0
    else detected_core_count()
)


# Cover art -------------------------------------------------------------------

COVER_ART_REMOTE: bool = bool(getattr(app_config, "cover_art_remote", True))
COVER_ART_SEARCH_URL: str = app_config.cover_art_search_url or COVER_ART_SEARCH_URL_DEFAULT

_timeout = getattr(app_config, "cover_art_timeout", COVER_ART_TIMEOUT_DEFAULT)
COVER_ART_TIMEOUT: float = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and _timeout > 0
    else COVER_ART_TIMEOUT_DEFAULT
)


# Rename phase ----------------------------------------------------------------

RENAME_TEMPLATE: str = app_config.rename_template or RENAME_TEMPLATE_DEFAULT


__all__ = [
    "COVER_ART_REMOTE",
    "COVER_ART_SEARCH_URL",
    "COVER_ART_TIMEOUT",
    "GAIN_EXECUTABLE",
    "GAIN_WORKERS",
    "RENAME_TEMPLATE",
    "detected_core_count",
]
