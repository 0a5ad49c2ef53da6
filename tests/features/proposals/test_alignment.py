"""Summary: Token alignment replays both sides exactly.
Why: Rendering and the empty-result check depend on a faithful edit script.
"""

from __future__ import annotations

import pytest

from cmym.features.proposals import AlignmentOp, DiffAligner, EditKind
from cmym.features.proposals.domain.alignment import tokenize

PAIRS: list[tuple[str | None, str | None]] = [
    ("pink floyd", "Pink Floyd"),
    ("The  Wall", "The Wall"),
    ("03 - love song", "Love Song"),
    ("", "Something New"),
    ("Remove Me", ""),
    (None, "From Nothing"),
    ("abc abc abc", "abc"),
    ("Live at Pompeii (1972)", "Live at Pompeii"),
    ("same", "same"),
]


@pytest.mark.parametrize(("old", "new"), PAIRS)
def test_alignment_replays_old_and_new(old: str | None, new: str | None) -> None:
    script = DiffAligner.align_text(old, new)

    assert DiffAligner.new_text(script) == (new or "")
    assert DiffAligner.old_text(script) == (old or "")


def test_tokenize_round_trips_text() -> None:
    text = "Don't Stop - Me  Now!"

    assert "".join(tokenize(text)) == text


def test_equal_sequences_produce_only_equal_steps() -> None:
    script = DiffAligner.align(["a", "b"], ["a", "b"])

    assert script == [AlignmentOp(EditKind.EQUAL, "a"), AlignmentOp(EditKind.EQUAL, "b")]


def test_ties_keep_earlier_common_elements() -> None:
    script = DiffAligner.align(["x", "a", "x"], ["x"])

    assert script[0] == AlignmentOp(EditKind.EQUAL, "x")
    assert [op.kind for op in script[1:]] == [EditKind.DELETE, EditKind.DELETE]


def test_alignment_is_deterministic() -> None:
    first = DiffAligner.align_text("a b c", "c b a")
    second = DiffAligner.align_text("a b c", "c b a")

    assert first == second


def test_empty_result_detection() -> None:
    assert DiffAligner.is_empty_result(DiffAligner.align_text("Title", ""))
    assert DiffAligner.is_empty_result(DiffAligner.align_text("Title", "   "))
    assert not DiffAligner.is_empty_result(DiffAligner.align_text("", "Title"))


def test_coalesce_merges_adjacent_steps() -> None:
    script = DiffAligner.coalesce(DiffAligner.align_text("old words", "new words"))

    kinds = [op.kind for op in script]
    assert kinds == [EditKind.DELETE, EditKind.INSERT, EditKind.EQUAL]
    assert script[-1].token == " words"
