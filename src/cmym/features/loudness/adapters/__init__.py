"""Process adapters for loudness analysis."""

from .subprocess_runner import REPORT_FLAG, UNDO_FLAG, SubprocessAnalysisRunner

__all__ = ["REPORT_FLAG", "SubprocessAnalysisRunner", "UNDO_FLAG"]
