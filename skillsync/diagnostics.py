"""Warning aggregation and end-of-run summaries."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .logger import logger
from .types import SkippedSkill

if TYPE_CHECKING:
    from pathlib import Path


class Diagnostics:
    """Collects warnings and skipped skill files for one command run.

    Warnings are logged as they happen; skipped files are also recorded so a
    single summary can be printed at the end. Nothing here raises.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.warnings: list[str] = []
        self.skipped: list[SkippedSkill] = []
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    def warn(self, message: str, **context: object) -> None:
        logger.warning(message, **context)
        self.warnings.append(message)

    def note(self, message: str) -> None:
        """Print a continuation line for the previous warning."""
        print(message, file=self.stream)

    def skip(self, path: Path, reason: str) -> None:
        self.warn(f"{path} - {reason}", path=str(path))
        self.skipped.append(SkippedSkill(path=path, reason=reason))

    def print_skipped_summary(self) -> None:
        if not self.skipped:
            return

        print(f"Skipped {len(self.skipped)} skills due to errors:", file=self.stream)
        for skipped in self.skipped:
            print(f"  - {skipped.path}: {skipped.reason}", file=self.stream)

    def print_warning_summary(self) -> None:
        if not self.warnings:
            return

        print(f"Completed with {len(self.warnings)} warning(s).", file=self.stream)
