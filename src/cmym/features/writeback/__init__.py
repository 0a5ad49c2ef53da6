# Path: `src/cmym/features/writeback/__init__.py`
# Summary: Terminal rename phase.
# Why: Move curated files into their template locations without partial folder writes.

from .domain import FolderBatch, RenameMove, RenameReport, Sanitizer
from .usecases import execute_renames, plan_renames, relocate, render_destination

__all__ = [
    "FolderBatch",
    "RenameMove",
    "RenameReport",
    "Sanitizer",
    "execute_renames",
    "plan_renames",
    "relocate",
    "render_destination",
]
