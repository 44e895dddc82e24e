"""
Console output for the CLI: status lines, the progress bar and the summary.

Everything here goes to stdout as plain text; structured logs stay on stderr.
"""

import sys
from typing import Optional, TextIO

from tqdm import tqdm

from timestampr.infrastructure.schema.types import RunStats

PROGRESS_DESCRIPTION = "Updating tables"


class ConsoleReporter:
    """Plain text reporter for a single migration run."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured.
        return self._stream or sys.stdout

    def status(self, message: str) -> None:
        print(message, file=self.stream)

    def error(self, message: str) -> None:
        print(f"[Error] {message}", file=self.stream)

    def progress(self, total: int) -> tqdm:
        """
        Create the per-table progress bar.

        Args:
            total: Number of tables that will be processed

        Returns:
            A tqdm bar, usable as a context manager
        """
        return tqdm(
            total=total,
            desc=PROGRESS_DESCRIPTION,
            unit="table",
            file=self.stream,
        )

    def summary(self, stats: RunStats) -> None:
        print(stats.summary(), file=self.stream)
