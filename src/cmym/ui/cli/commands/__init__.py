"""CLI command implementations."""

from .review import ReviewCommand
from .stages import StagesCommand

__all__ = ["ReviewCommand", "StagesCommand"]
