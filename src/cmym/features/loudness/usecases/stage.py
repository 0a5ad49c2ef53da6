"""Summary: ReplayGain stage offering one analysis job per album.
Why: Loudness values are computed by an external program, not suggested by rules.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, override

from cmym.config.settings import GAIN_WORKERS
from cmym.features.loudness.adapters import SubprocessAnalysisRunner
from cmym.features.loudness.domain import (
    ALBUM_GAIN_KEY,
    GAIN_KEYS,
    TRACK_GAIN_KEY,
    GainJob,
)
from cmym.features.proposals import DecisionKind, ProposalGroup, Stage
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import FieldId, TrackRecord, TrackStore

from .ports import AnalysisRunner
from .scheduler import GainJobScheduler


def _album_key(record: TrackRecord) -> tuple[str, ...]:
    album = record.text(FieldId.ALBUM)
    if not album:
        return ("", "", str(record.path))
    return (record.text(FieldId.ALBUM_ARTIST) or "", album, str(record.folder))


def _is_album(key: tuple[str, ...]) -> bool:
    return bool(key[1])


def _album_scope(key: tuple[str, ...], members: list[TrackRecord]) -> bool:
    """Album-level values only exist for albums of more than one track."""

    return _is_album(key) and len(members) > 1


def _missing_values(members: list[TrackRecord], album_scope: bool) -> bool:
    for member in members:
        if member.custom(TRACK_GAIN_KEY) is None:
            return True
        if album_scope and member.custom(ALBUM_GAIN_KEY) is None:
            return True
    return False


def _current_gain(members: list[TrackRecord], album_scope: bool) -> str | None:
    key = ALBUM_GAIN_KEY if album_scope else TRACK_GAIN_KEY
    values = {member.custom(key) for member in members}
    if values == {None}:
        return None
    if len(values) == 1:
        return values.pop()
    return "mixed"


class GainStage(Stage):
    """Offer albums for loudness analysis and store the results.

    Albums missing any gain value are offered first; when none are missing,
    every album is offered for an optional recompute. Confirming queues the
    analysis, clearing removes stored gain values. Jobs run when the stage is
    committed and tags change only after every job has finished.
    """

    stage_id: ClassVar[str] = "replaygain"
    title: ClassVar[str] = "ReplayGain"
    field: ClassVar[FieldId] = FieldId.CUSTOM_TEXT

    def __init__(
        self,
        runner: AnalysisRunner | None = None,
        width: int = GAIN_WORKERS,
    ) -> None:
        self._runner: AnalysisRunner = runner or SubprocessAnalysisRunner()
        self._width: int = width

    @override
    def availability_error(self) -> str | None:
        if self._runner.available():
            return None
        logger.warning(
            "Gain analysis unavailable: %s not found",
            self._runner.executable,
            extra={"review_event": ReviewEvent.GAIN_UNAVAILABLE},
        )
        return f"{self._runner.executable} is not installed"

    @override
    def compute(self, store: TrackStore) -> list[ProposalGroup]:
        grouped: dict[tuple[str, ...], list[TrackRecord]] = {}
        for record in store:
            grouped.setdefault(_album_key(record), []).append(record)

        ordered = sorted(grouped.items(), key=lambda item: str(item[0]))
        outstanding = [
            (key, members)
            for key, members in ordered
            if _missing_values(members, _album_scope(key, members))
        ]
        offered = outstanding or ordered
        recompute = not outstanding

        groups: list[ProposalGroup] = []
        for key, members in offered:
            album_scope = _album_scope(key, members)
            context = [
                ("Folder", str(members[0].folder)),
                ("Tracks", str(len(members))),
                ("Scope", "album" if _is_album(key) else "single"),
            ]
            if _is_album(key):
                context.append(("Album", key[1]))
            if recompute:
                context.append(("Status", "already analysed"))
            verb = "re-analyse" if recompute else "analyse"
            groups.append(
                ProposalGroup(
                    field=self.field,
                    members=members,
                    old_value=_current_gain(members, album_scope),
                    suggested_value=f"{verb} {len(members)} track(s)",
                    key=key,
                    context=context,
                )
            )
        return groups

    @override
    def edit(self, group: ProposalGroup, text: str) -> bool:
        logger.warning("ReplayGain groups accept confirm or clear only, ignoring %r", text)
        return False

    def jobs_for(self, groups: Iterable[ProposalGroup]) -> list[GainJob]:
        """One job per accepted group, numbered in group order."""

        jobs: list[GainJob] = []
        for group in groups:
            if group.decision is None or group.decision.kind is not DecisionKind.ACCEPTED:
                continue
            album_scope = _album_scope(group.key, group.members)
            label = group.key[1] if _is_album(group.key) else group.members[0].path.name
            jobs.append(
                GainJob(
                    job_id=len(jobs),
                    members=tuple(group.members),
                    album_scope=album_scope,
                    label=label,
                )
            )
        return jobs

    @override
    def commit(self, store: TrackStore, groups: Iterable[ProposalGroup]) -> int:
        decided = [group for group in groups if group.decision is not None]
        for group in decided:
            if group.decision is not None and group.decision.kind is DecisionKind.CLEARED:
                self.apply(store, group)

        jobs = self.jobs_for(decided)
        if not jobs:
            return len(decided)

        outcomes = GainJobScheduler(self._runner, self._width).run(jobs)
        for outcome in outcomes:
            if outcome.report is None:
                continue
            for member, values in zip(outcome.job.members, outcome.report.tag_values(), strict=True):
                for key in GAIN_KEYS:
                    member.set_custom(key, values.get(key))
        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.info("Stored gain values for %d of %d job(s)", succeeded, len(jobs))
        return len(decided) - len(jobs) + succeeded

    @override
    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        """Remove stored gain values from the group's members."""

        del store
        for member in group.members:
            for key in GAIN_KEYS:
                member.set_custom(key, None)
        logger.debug(
            "Removed gain values from %d track(s)",
            len(group.members),
            extra={"review_event": ReviewEvent.GROUP_DECISION},
        )


__all__ = ["GainStage"]
