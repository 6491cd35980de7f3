"""
Cooperative cancellation for long-running analyses.

The pipeline checks the token between stages and between files. A token may
carry a deadline; once it passes, the token reports a timeout.
"""

import threading
import time
from typing import Optional


class AnalysisCancelled(Exception):
    """Raised inside the pipeline when the caller cancelled the run."""


class AnalysisTimeout(AnalysisCancelled):
    """Raised inside the pipeline when the run exceeded its deadline."""


class CancellationToken:
    """Thread-safe cancellation flag with an optional deadline."""

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline: Optional[float] = None
        if timeout is not None:
            self.start_timer(timeout)

    def start_timer(self, timeout: float) -> None:
        """Arm (or re-arm) the deadline ``timeout`` seconds from now."""
        self._deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        self._event.set()

    @property
    def timed_out(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set() or self.timed_out

    def raise_if_cancelled(self) -> None:
        """Raise AnalysisTimeout or AnalysisCancelled if the run must stop.

        An explicit cancel wins over an elapsed deadline.
        """
        if self._event.is_set():
            raise AnalysisCancelled("Analysis was cancelled")
        if self.timed_out:
            raise AnalysisTimeout("Analysis timed out")
