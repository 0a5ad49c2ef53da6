"""Summary: Bidirectional cursor over stages and their proposal groups.
Why: Let the operator move freely between groups and stages and quit at any point.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum

from cmym.features.proposals import ProposalGroup, Stage
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import TrackStore

from .ports import ReviewPort
from .position import NavigatorPosition, clamp
from .signals import Clear, Confirm, Edit, NavigationSignal, Quit, Step, SwitchPane


class StageExit(StrEnum):
    """Why a stage visit ended."""

    NEXT = "next"
    PREVIOUS = "previous"
    QUIT = "quit"


class Navigator:
    """Drive the per-group interaction loop of the current stage."""

    def __init__(self, stages: Sequence[Stage], store: TrackStore, ui: ReviewPort) -> None:
        if not stages:
            raise ValueError("Navigator needs at least one stage")
        self._stages: list[Stage] = list(stages)
        self._store: TrackStore = store
        self._ui: ReviewPort = ui
        self._remembered: dict[int, int] = {}
        self._cancelled: bool = False
        self._unavailable: str | None = None
        self.position: NavigatorPosition = NavigatorPosition()
        self.groups: list[ProposalGroup] = []

    @property
    def stage(self) -> Stage:
        return self._stages[self.position.stage_index]

    @property
    def stage_count(self) -> int:
        return len(self._stages)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def enter_stage(self, index: int) -> list[ProposalGroup]:
        """Compute the groups of stage ``index`` and restore its cursor."""

        self.position.stage_index = clamp(index, 0, self.stage_count - 1)
        stage = self.stage
        unavailable = self._unavailable = stage.availability_error()
        if unavailable:
            self._ui.notify(f"{stage.title}: {unavailable}")
            logger.info(
                "%s unavailable: %s",
                stage.title,
                unavailable,
                extra={"review_event": ReviewEvent.STAGE_SKIP},
            )
            self.groups = []
        else:
            self.groups = stage.compute(self._store)

        remembered = self._remembered.get(self.position.stage_index, 0)
        self.position.item_index = clamp(remembered, 0, len(self.groups) - 1)
        logger.debug(
            "Entered stage %s with %d group(s)",
            stage.stage_id,
            len(self.groups),
            extra={"review_event": ReviewEvent.STAGE_ENTER},
        )
        return self.groups

    def step(self, delta: int) -> int:
        """Move the cursor by ``delta``, clamped to the group range."""

        self.position.item_index = clamp(
            self.position.item_index + delta, 0, len(self.groups) - 1
        )
        return self.position.item_index

    def leave_stage(self) -> None:
        """Remember the cursor of the stage being left."""

        self._remembered[self.position.stage_index] = self.position.item_index

    def advance_stage(self, direction: int) -> bool:
        """Enter the neighbouring stage; False once past the last stage.

        Moving back from the first stage re-enters it.
        """

        self.leave_stage()
        target = self.position.stage_index + (1 if direction > 0 else -1)
        if target >= self.stage_count:
            return False
        _ = self.enter_stage(max(target, 0))
        return True

    def cancel(self) -> None:
        """Stop the current visit; confirmed decisions stay on their groups."""

        self._cancelled = True

    def run_stage(self) -> StageExit:
        """Interact with the operator until the stage visit ends."""

        stage = self.stage
        if not self.groups:
            if self._unavailable is None:
                self._ui.notify(f"{stage.title}: no action required")
                logger.info(
                    "%s: no action required",
                    stage.title,
                    extra={"review_event": ReviewEvent.STAGE_SKIP},
                )
            return StageExit.NEXT

        self._ui.show_stage(stage, len(self.groups))
        while not self._cancelled:
            group = self.groups[self.position.item_index]
            group.ensure_loaded()
            signal = self._ui.prompt(stage, group, self.position, len(self.groups))
            outcome = self._handle(stage, group, signal)
            if outcome is not None:
                return outcome
        return StageExit.QUIT

    def _handle(
        self,
        stage: Stage,
        group: ProposalGroup,
        signal: NavigationSignal,
    ) -> StageExit | None:
        if isinstance(signal, Confirm):
            if not group.is_satisfied and group.empties_forbidden_field:
                if not self._ui.confirm_empty(stage, group):
                    return None
            group.accept()
            return self._forward()

        if isinstance(signal, Clear):
            if not group.can_be_empty and not self._ui.confirm_empty(stage, group):
                return None
            group.clear()
            return self._forward()

        if isinstance(signal, Edit):
            if stage.edit(group, signal.text):
                return self._forward()
            return None

        if isinstance(signal, Step):
            _ = self.step(signal.delta)
            return None

        if isinstance(signal, SwitchPane):
            return StageExit.NEXT if signal.direction > 0 else StageExit.PREVIOUS

        if isinstance(signal, Quit):
            self.cancel()
            return StageExit.QUIT

        raise TypeError(f"Unsupported navigation signal: {signal!r}")

    def _forward(self) -> StageExit | None:
        if self.position.item_index >= len(self.groups) - 1:
            return StageExit.NEXT
        _ = self.step(1)
        return None


__all__ = ["Navigator", "StageExit"]
