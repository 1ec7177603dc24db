"""
Unified command orchestrator for duplicate detection.
This is the SINGLE source of truth for the workflow — the CLI and any other
front-end go through it.
"""
import time
import logging
from typing import List, Optional, Callable

from dupedetector.core.models import (
    CandidateFile, DuplicateSet, DetectionParams, DetectionResult, DetectionStats, Stage
)
from dupedetector.core.interfaces import ErrorSink, ProgressListener
from dupedetector.core.state import ScanState
from dupedetector.core.scanner import FileScannerImpl
from dupedetector.core.detector import DetectorImpl
from dupedetector.core.exclusions import build_exclusion_matcher

logger = logging.getLogger(__name__)


class DetectionCommand:
    """
    Orchestrates the entire detection workflow:
    1. Build the exclusion predicate (fatal on bad regex)
    2. Canonicalize roots and collect candidates (fatal on unreadable roots)
    3. Group by size and resolve every group

    Usage:
        params = DetectionParams(roots=["~/Pictures", "/mnt/backup"])
        command = DetectionCommand()
        result = command.execute(
            params,
            on_duplicate_set=print_set,
            error_sink=print_error,
            progress_listener=print_progress,
        )

    Nothing on disk is modified.
    """

    def __init__(self):
        self._files: List[CandidateFile] = []
        self.state: Optional[ScanState] = None

    def execute(
            self,
            params: DetectionParams,
            on_duplicate_set: Optional[Callable[[DuplicateSet], None]] = None,
            error_sink: Optional[ErrorSink] = None,
            progress_listener: Optional[ProgressListener] = None,
            on_stage_complete: Optional[Callable[[Stage, ScanState], None]] = None
    ) -> DetectionResult:
        """
        Execute detection with given parameters.

        Args:
            params: Validated detection parameters
            on_duplicate_set: Called for each duplicate set as soon as it is proven
            error_sink: (message, cause) -> None, receives every non-fatal error
            progress_listener: (stage, state) -> None, throttled progress ticks
            on_stage_complete: Called after collection and after size grouping

        Returns:
            DetectionResult

        Raises:
            ValueError: If the exclusion patterns are invalid
            InvalidRootError: If a root path cannot be read or canonicalized
        """
        state = ScanState(error_sink=error_sink, progress_interval=params.progress_interval)
        if progress_listener:
            state.add_listener(progress_listener)
        self.state = state
        stats = DetectionStats()

        exclusion = build_exclusion_matcher(params.excluded_patterns)

        # Step 1: collect candidates
        start_time = time.time()
        scanner = FileScannerImpl(
            roots=params.roots,
            state=state,
            exclusion=exclusion,
            min_size=params.min_size_bytes
        )
        self._files = scanner.scan()
        collect_time = time.time() - start_time
        stats.update_stage(Stage.COLLECT.value, 0, len(self._files), collect_time)
        stats.total_time += collect_time
        logger.info(f"Total files scanned: {state.scanned}")

        if on_stage_complete:
            on_stage_complete(Stage.COLLECT, state)

        # Step 2: group and resolve
        detector = DetectorImpl(
            state,
            algorithm=params.algorithm,
            buffer_size=params.buffer_size
        )
        on_grouped = None
        if on_stage_complete:
            def on_grouped(groups):
                on_stage_complete(Stage.SIZE, state)

        return detector.find_duplicates(
            self._files,
            on_duplicate_set=on_duplicate_set,
            stats=stats,
            on_grouped=on_grouped
        )

    def get_files(self) -> List[CandidateFile]:
        """Get collected candidates after execution."""
        return self._files.copy()  # Return copy to prevent external mutation
