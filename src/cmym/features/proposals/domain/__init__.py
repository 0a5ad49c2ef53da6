# Path: `src/cmym/features/proposals/domain/__init__.py`
# Summary: Export pure proposal domain symbols.
# Why: Stages, navigator and UI share the same value objects.

from .alignment import AlignmentOp, AlignmentScript, DiffAligner, EditKind, tokenize
from .models import Decision, DecisionKind, ProposalGroup
from .titlecase import TextNormalizer, normalize

__all__ = [
    "AlignmentOp",
    "AlignmentScript",
    "Decision",
    "DecisionKind",
    "DiffAligner",
    "EditKind",
    "ProposalGroup",
    "TextNormalizer",
    "normalize",
    "tokenize",
]
