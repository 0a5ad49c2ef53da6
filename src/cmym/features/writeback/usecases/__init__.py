"""Rename phase use cases: planning and execution."""

from .executor import ConflictHandler, execute_renames, relocate
from .planner import plan_renames, render_destination, template_values

__all__ = [
    "ConflictHandler",
    "execute_renames",
    "plan_renames",
    "relocate",
    "render_destination",
    "template_values",
]
