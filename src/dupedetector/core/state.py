"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/state.py
Run-wide counters (scanned, pending, errors) and throttled progress notification.

One ScanState is created per run and passed to every component that reads files.
It is not thread-safe: the engine reads one file at a time.
"""

import time
import logging
from typing import List, Optional, Callable

from dupedetector.core.interfaces import ErrorSink, ProgressListener

logger = logging.getLogger(__name__)

STAGE_SCANNING = "scanning"
STAGE_READING = "reading"


def log_error_sink(message: str, cause: Optional[BaseException]) -> None:
    """Default error sink: log the failure and carry on."""
    if cause is not None:
        logger.warning(f"{message}: {cause}")
    else:
        logger.warning(message)


class ScanState:
    """
    Progress and error tracker for a single run.

    Attributes:
        scanned: Entries visited by the candidate collector.
        pending: Files grouped by size whose comparison or digest is not done yet.
        errors: Non-fatal errors reported so far.
    """

    def __init__(
        self,
        error_sink: Optional[ErrorSink] = None,
        progress_interval: float = 0.2,
        clock: Callable[[], float] = time.monotonic
    ):
        self.scanned: int = 0
        self.pending: int = 0
        self.errors: int = 0
        self.progress_interval = progress_interval
        self._error_sink = error_sink or log_error_sink
        self._clock = clock
        self._next_time: float = 0.0
        self._listeners: List[ProgressListener] = []

    def add_listener(self, listener: ProgressListener) -> None:
        """Adds a listener to receive throttled progress ticks."""
        self._listeners.append(listener)

    # ----- counters -----

    def file_scanned(self) -> None:
        self.scanned += 1
        self._tick(STAGE_SCANNING)

    def add_pending(self, count: int = 1) -> None:
        self.pending += count

    def reduce_pending(self, count: int) -> None:
        self.pending -= count
        self._tick(STAGE_READING)

    def report_error(self, message: str, cause: Optional[BaseException] = None) -> None:
        """Count a non-fatal error and forward it to the error sink."""
        self.errors += 1
        self.expedite()
        self._error_sink(message, cause)

    # ----- progress throttling -----

    def expedite(self) -> None:
        """Make the next progress tick due immediately."""
        self._next_time = 0.0

    def is_due(self) -> bool:
        """
        True when enough time has passed since the last tick.
        Claims the tick: the next one is scheduled progress_interval from now.
        """
        now = self._clock()
        if now < self._next_time:
            return False
        self._next_time = now + self.progress_interval
        return True

    def _tick(self, stage: str) -> None:
        if not self._listeners or not self.is_due():
            return
        for listener in self._listeners:
            try:
                listener(stage, self)
            except Exception as e:
                logger.error(f"Error in progress listener: {e}")
