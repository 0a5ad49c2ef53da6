"""Summary: Shared fixtures building track stores and scripted review ports.
Why: Most tests start from a handful of records with a few tags set.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest

from cmym.features.navigation import NavigationSignal, NavigatorPosition, Quit
from cmym.features.proposals import ProposalGroup, Stage
from cmym.shared.track_store import TrackStore

StoreFactory = Callable[..., TrackStore]


@pytest.fixture
def make_store() -> StoreFactory:
    """Return a factory turning ``{path: {field: value}}`` into a store."""

    def _factory(entries: Mapping[str | Path, Mapping[str, object]]) -> TrackStore:
        return TrackStore.from_entries(list(entries.items()))

    return _factory


class ScriptedReviewUI:
    """Review port replaying a fixed list of signals, then quitting."""

    def __init__(self, signals: Iterable[NavigationSignal] = (), *, allow_empty: bool = True) -> None:
        self.signals: list[NavigationSignal] = list(signals)
        self.allow_empty: bool = allow_empty
        self.notices: list[str] = []
        self.shown: list[str] = []
        self.prompted: list[tuple[str, int]] = []
        self.empty_requests: int = 0

    def show_stage(self, stage: Stage, group_count: int) -> None:
        self.shown.append(stage.stage_id)

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def prompt(
        self,
        stage: Stage,
        group: ProposalGroup,
        position: NavigatorPosition,
        group_count: int,
    ) -> NavigationSignal:
        self.prompted.append((stage.stage_id, position.item_index))
        return self.signals.pop(0) if self.signals else Quit()

    def confirm_empty(self, stage: Stage, group: ProposalGroup) -> bool:
        self.empty_requests += 1
        return self.allow_empty


@pytest.fixture
def scripted_ui() -> Callable[..., ScriptedReviewUI]:
    """Return a factory for scripted review ports."""

    return ScriptedReviewUI
