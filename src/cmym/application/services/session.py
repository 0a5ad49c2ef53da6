"""Review session wiring the store, the stage catalog and the navigator."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import final

from cmym.features.navigation import Navigator, ReviewPort, StageExit
from cmym.features.proposals import Stage
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import TrackStore


@dataclass(slots=True)
class SessionOutcome:
    """What a review session did to the store."""

    applied: int = 0
    stages_committed: int = 0
    cancelled: bool = False


@final
class ReviewSession:
    """Own the track store and navigator for one interactive review.

    Decisions are committed each time a stage visit ends, including when the
    operator quits or interrupts, so confirmed work is never lost.
    """

    def __init__(self, store: TrackStore, stages: Sequence[Stage], ui: ReviewPort) -> None:
        self.store: TrackStore = store
        self.navigator: Navigator = Navigator(stages, store, ui)
        self._outcome: SessionOutcome = SessionOutcome()

    def run(self) -> SessionOutcome:
        """Walk the stages until the last one is left or the operator quits."""

        try:
            _ = self.navigator.enter_stage(0)
            while True:
                exit_reason = self.navigator.run_stage()
                self._commit_visit()
                if exit_reason is StageExit.QUIT:
                    self._outcome.cancelled = True
                    break
                direction = -1 if exit_reason is StageExit.PREVIOUS else 1
                if not self.navigator.advance_stage(direction):
                    break
        except KeyboardInterrupt:
            logger.warning("Review interrupted; keeping confirmed decisions")
            self.navigator.cancel()
            self._outcome.cancelled = True
            self._commit_visit()

        logger.info(
            "Review finished: %d decision(s) applied across %d stage visit(s)",
            self._outcome.applied,
            self._outcome.stages_committed,
            extra={"review_event": ReviewEvent.SESSION_COMMIT},
        )
        return self._outcome

    def _commit_visit(self) -> None:
        groups = self.navigator.groups
        if not groups:
            return
        # Detach first so an interrupt cannot commit the same visit twice.
        self.navigator.groups = []
        stage = self.navigator.stage
        applied = stage.commit(self.store, groups)
        self._outcome.applied += applied
        self._outcome.stages_committed += 1
        logger.info(
            "%s: applied %d decision(s)",
            stage.title,
            applied,
            extra={"review_event": ReviewEvent.STAGE_COMMIT},
        )


__all__ = ["ReviewSession", "SessionOutcome"]
