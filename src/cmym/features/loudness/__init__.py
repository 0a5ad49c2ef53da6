# Path: `src/cmym/features/loudness/__init__.py`
# Summary: ReplayGain analysis feature.
# Why: Farm album loudness analysis out to an external program with bounded concurrency.

from .adapters import SubprocessAnalysisRunner
from .domain import GainJob, GainOutcome, JobReport, JobReportError, parse_report
from .usecases import AnalysisRunner, GainJobScheduler, GainStage

__all__ = [
    "AnalysisRunner",
    "GainJob",
    "GainJobScheduler",
    "GainOutcome",
    "GainStage",
    "JobReport",
    "JobReportError",
    "SubprocessAnalysisRunner",
    "parse_report",
]
