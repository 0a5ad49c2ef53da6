"""Loudness analysis use cases: runner port, scheduler and review stage."""

from .ports import AnalysisRunner
from .scheduler import REPORT_NAME, GainJobScheduler
from .stage import GainStage

__all__ = ["AnalysisRunner", "GainJobScheduler", "GainStage", "REPORT_NAME"]
