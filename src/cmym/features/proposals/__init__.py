# Path: `src/cmym/features/proposals/__init__.py`
# Summary: Export proposal domain and use case symbols.
# Why: Provide a stable import surface for the session, UI and tests.

from .domain import (
    AlignmentOp,
    Decision,
    DecisionKind,
    DiffAligner,
    EditKind,
    ProposalGroup,
    TextNormalizer,
    normalize,
)
from .usecases import Stage, TextStage, UnknownStageError, build_catalog, text_stages

__all__ = [
    "AlignmentOp",
    "Decision",
    "DecisionKind",
    "DiffAligner",
    "EditKind",
    "ProposalGroup",
    "Stage",
    "TextNormalizer",
    "TextStage",
    "UnknownStageError",
    "build_catalog",
    "normalize",
    "text_stages",
]
