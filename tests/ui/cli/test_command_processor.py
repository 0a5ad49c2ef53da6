"""Summary: Exit codes of the command processor.
Why: Scripts rely on distinct codes for interrupts, bad input and failures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from cmym.application.services import ReviewSummary, SessionOutcome
from cmym.features.proposals import UnknownStageError
from cmym.ui.cli.cli import CommandProcessor


@pytest.fixture(autouse=True)
def _no_logging_setup(mocker: MockerFixture) -> None:
    _ = mocker.patch("cmym.ui.cli.args.parser.setup_logger")


def test_successful_review_returns_normally(tmp_path: Path, mocker: MockerFixture) -> None:
    command = mocker.patch("cmym.ui.cli.cli.ReviewCommand")
    command.return_value.execute.return_value = ReviewSummary(session=SessionOutcome())

    CommandProcessor.process_command(["review", str(tmp_path)])

    command.return_value.execute.assert_called_once_with()


def test_write_failures_exit_with_one(tmp_path: Path, mocker: MockerFixture) -> None:
    command = mocker.patch("cmym.ui.cli.cli.ReviewCommand")
    command.return_value.execute.return_value = ReviewSummary(session=SessionOutcome(), write_failures=2)

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["review", str(tmp_path)])

    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (KeyboardInterrupt(), 130),
        (UnknownStageError("Unknown stage(s): nope"), 2),
        (RuntimeError("boom"), 1),
    ],
)
def test_errors_map_to_exit_codes(
    tmp_path: Path, mocker: MockerFixture, error: BaseException, code: int
) -> None:
    command = mocker.patch("cmym.ui.cli.cli.ReviewCommand")
    command.return_value.execute.side_effect = error

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["review", str(tmp_path)])

    assert excinfo.value.code == code


def test_stages_command_lists_catalog(mocker: MockerFixture) -> None:
    command = mocker.patch("cmym.ui.cli.cli.StagesCommand")

    CommandProcessor.process_command(["stages"])

    command.return_value.execute.assert_called_once_with()
