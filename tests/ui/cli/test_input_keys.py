"""Summary: Operator input mapping onto navigation signals.
Why: Escape sequences must never be mistaken for edits and vice versa.
"""

from __future__ import annotations

import pytest

from cmym.features.navigation import PAGE_SIZE, Clear, Confirm, Edit, Quit, Step, SwitchPane
from cmym.ui.cli.display import parse_input


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", Confirm()),
        ("   \n", Confirm()),
        ("-", Clear()),
        (" - ", Clear()),
        ("\\p", Step(-1)),
        ("\\n", Step(1)),
        ("\\P", Step(-PAGE_SIZE)),
        ("\\N", Step(PAGE_SIZE)),
        ("\\[", SwitchPane(-1)),
        ("\\]", SwitchPane(1)),
        ("\\q", Quit()),
        ("Pink Floyd", Edit("Pink Floyd")),
        ("--", Edit("--")),
        ("\\x", Edit("\\x")),
    ],
)
def test_parse_input(raw: str, expected: object) -> None:
    assert parse_input(raw) == expected


def test_edit_keeps_inner_spacing() -> None:
    assert parse_input("  The  Wall\n") == Edit("  The  Wall")
