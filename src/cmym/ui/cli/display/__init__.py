"""Display helpers for the CLI."""

from .keys import parse_input
from .review import RichReviewUI, render_alignment
from .summary import SummaryDisplay

__all__ = ["RichReviewUI", "SummaryDisplay", "parse_input", "render_alignment"]
