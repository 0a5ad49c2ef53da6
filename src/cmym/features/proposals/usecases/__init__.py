"""Summary: Package exports for proposal use cases.
Why: Keep stage wiring imports short for the session and tests.
"""

from .catalog import UnknownStageError, build_catalog, text_stages
from .stages import Stage, TextStage

__all__ = ["Stage", "TextStage", "UnknownStageError", "build_catalog", "text_stages"]
