"""Summary: Run the gain analysis executable as a child process.
Why: One external process per job is the unit the scheduler bounds.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from cmym.config.settings import GAIN_EXECUTABLE
from cmym.platform.logging import logger

UNDO_FLAG = "-u"
REPORT_FLAG = "-o"


class SubprocessAnalysisRunner:
    """Call an mp3gain-compatible program (``aacgain`` by default)."""

    def __init__(self, executable: str = GAIN_EXECUTABLE) -> None:
        self._executable: str = executable

    @property
    def executable(self) -> str:
        return self._executable

    def available(self) -> bool:
        return shutil.which(self._executable) is not None

    def undo(self, files: list[Path]) -> None:
        _ = self._run([UNDO_FLAG, *map(str, files)])

    def analyze(self, files: list[Path], report_path: Path) -> None:
        with report_path.open("w", encoding="utf-8") as report:
            _ = self._run([REPORT_FLAG, *map(str, files)], stdout=report)

    def _run(self, arguments: list[str], stdout: object | None = None) -> int:
        command = [self._executable, *arguments]
        logger.debug("Running %s", " ".join(command))
        completed = subprocess.run(  # noqa: S603 - arguments are file paths
            command,
            stdout=stdout if stdout is not None else subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
        if completed.returncode != 0:
            logger.debug(
                "%s exited with %d: %s",
                self._executable,
                completed.returncode,
                (completed.stderr or "").strip(),
            )
        return completed.returncode


__all__ = ["REPORT_FLAG", "SubprocessAnalysisRunner", "UNDO_FLAG"]
