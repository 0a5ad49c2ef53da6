"""Summary: Bounded pool running one external analysis job per album.
Why: Never start more analysis processes than there are cores, and drain every job.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from threading import Lock

from cmym.config.settings import GAIN_WORKERS
from cmym.features.loudness.domain import (
    GainJob,
    GainOutcome,
    JobContext,
    JobReportError,
    parse_report,
)
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent

from .ports import AnalysisRunner

REPORT_NAME = "report.tsv"


class GainJobScheduler:
    """Run gain jobs with at most ``width`` in flight.

    Workers only copy files and call the runner. Reports are parsed and
    scratch areas removed on the calling thread, in completion order.
    """

    def __init__(
        self,
        runner: AnalysisRunner,
        width: int = GAIN_WORKERS,
        *,
        scratch_root: Path | None = None,
    ) -> None:
        self._runner: AnalysisRunner = runner
        self._width: int = max(1, width)
        self._scratch_root: Path | None = scratch_root
        self._lock: Lock = Lock()
        self._running: int = 0
        self.peak_running: int = 0

    @property
    def width(self) -> int:
        return self._width

    def run(self, jobs: Iterable[GainJob]) -> list[GainOutcome]:
        """Run ``jobs`` and return one outcome per job, in completion order."""

        outcomes: list[GainOutcome] = []
        in_flight: dict[Future[JobContext], GainJob] = {}
        with ThreadPoolExecutor(max_workers=self._width, thread_name_prefix="cmym-gain") as pool:
            for job in jobs:
                while len(in_flight) >= self._width:
                    outcomes.extend(self._collect(in_flight))
                logger.debug(
                    "Submitting gain job %d (%s)",
                    job.job_id,
                    job.label,
                    extra={"review_event": ReviewEvent.GAIN_JOB_SUBMIT},
                )
                in_flight[pool.submit(self._execute, job)] = job
            while in_flight:
                outcomes.extend(self._collect(in_flight))
        return outcomes

    def _collect(self, in_flight: dict[Future[JobContext], GainJob]) -> list[GainOutcome]:
        done, _ = wait(list(in_flight), return_when=FIRST_COMPLETED)
        return [self._finish(in_flight.pop(future), future) for future in done]

    def _execute(self, job: GainJob) -> JobContext:
        with self._lock:
            self._running += 1
            self.peak_running = max(self.peak_running, self._running)
        scratch = Path(tempfile.mkdtemp(prefix="cmym-gain-", dir=self._scratch_root))
        context = JobContext(job=job, scratch=scratch, report_path=scratch / REPORT_NAME)
        try:
            for index, source in enumerate(job.paths, start=1):
                copy = scratch / f"{index:03d}{source.suffix}"
                _ = shutil.copy2(source, copy)
                context.copies.append(copy)
            self._runner.undo(context.copies)
            self._runner.analyze(context.copies, scratch / REPORT_NAME)
        except BaseException:
            shutil.rmtree(scratch, ignore_errors=True)
            raise
        finally:
            with self._lock:
                self._running -= 1
        return context

    def _finish(self, job: GainJob, future: Future[JobContext]) -> GainOutcome:
        try:
            context = future.result()
        except (OSError, RuntimeError) as exc:
            return self._failed(job, f"could not run analysis: {exc}")

        try:
            report_path = context.report_path or context.scratch / REPORT_NAME
            text = report_path.read_text(encoding="utf-8", errors="replace")
            report = parse_report(text, len(job.members), album_scope=job.album_scope)
        except (OSError, JobReportError) as exc:
            return self._failed(job, str(exc))
        finally:
            shutil.rmtree(context.scratch, ignore_errors=True)

        logger.info(
            "Analysed %s",
            job.label or f"job {job.job_id}",
            extra={"review_event": ReviewEvent.GAIN_JOB_COMPLETE},
        )
        return GainOutcome(job=job, report=report)

    def _failed(self, job: GainJob, reason: str) -> GainOutcome:
        logger.error(
            "Gain job %s failed: %s",
            job.label or job.job_id,
            reason,
            extra={"review_event": ReviewEvent.GAIN_JOB_ERROR},
        )
        return GainOutcome(job=job, error=reason)


__all__ = ["GainJobScheduler", "REPORT_NAME"]
