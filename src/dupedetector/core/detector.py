"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

detector.py
Implements the detection pipeline over a collected candidate list:
    size grouping → per-group resolution (pair comparison or digest sort)
"""
import time
import logging
from typing import List, Optional, Callable

from dupedetector.core.models import (
    CandidateFile, SizeGroup, DuplicateSet, DetectionResult, DetectionStats, Stage,
    DEFAULT_ALGORITHM, DEFAULT_BUFFER_SIZE
)
from dupedetector.core.interfaces import Detector, FileGrouper, DuplicateResolver
from dupedetector.core.state import ScanState
from dupedetector.core.grouper import FileGrouperImpl
from dupedetector.core.comparator import PairwiseComparatorImpl
from dupedetector.core.hasher import DigesterImpl
from dupedetector.core.resolver import DuplicateResolverImpl

logger = logging.getLogger(__name__)


# =============================
# Main Detector Class
# =============================
class DetectorImpl(Detector):
    """
    Groups candidates by size, then resolves each group in ascending size order.
    Duplicate sets are handed to `on_duplicate_set` as soon as each is proven.
    """
    def __init__(
        self,
        state: ScanState,
        grouper: Optional[FileGrouper] = None,
        resolver: Optional[DuplicateResolver] = None,
        algorithm: str = DEFAULT_ALGORITHM,
        buffer_size: int = DEFAULT_BUFFER_SIZE
    ):
        self.state = state
        self.grouper = grouper or FileGrouperImpl(state)
        self.resolver = resolver or DuplicateResolverImpl(
            PairwiseComparatorImpl(state, buffer_size),
            DigesterImpl(state, algorithm, buffer_size)
        )

    def find_duplicates(
        self,
        files: List[CandidateFile],
        on_duplicate_set: Optional[Callable[[DuplicateSet], None]] = None,
        stats: Optional[DetectionStats] = None,
        on_grouped: Optional[Callable[[List[SizeGroup]], None]] = None
    ) -> DetectionResult:
        """
        Args:
            files: Candidates produced by the scanner
            on_duplicate_set: Called for each set, in the order sets are found
            stats: Stats object to add to (a new one is created if omitted)
            on_grouped: Called once with the size groups, before any file is read
        Returns:
            DetectionResult
        """
        stats = stats or DetectionStats()
        total_start_time = time.time()
        result = DetectionResult(candidates=len(files), stats=stats)

        # Initial stage: group by size
        start_time = time.time()
        groups = self.grouper.group_by_size(files)
        DetectorImpl._update_stats(stats, Stage.SIZE, time.time() - start_time, len(groups),
                                   sum(len(g.files) for g in groups))
        logger.info(f"Total files to read: {self.state.pending}")
        if on_grouped:
            on_grouped(groups)

        for group in groups:
            stage = Stage.COMPARE if len(group.files) == 2 else Stage.DIGEST
            start_time = time.time()
            duplicate_sets, wasted_bytes = self.resolver.resolve(group)
            DetectorImpl._update_stats(stats, stage, time.time() - start_time, len(duplicate_sets),
                                       len(group.files))

            for duplicate_set in duplicate_sets:
                result.duplicate_sets.append(duplicate_set)
                # Show the pending count sooner after a result.
                self.state.expedite()
                if on_duplicate_set:
                    on_duplicate_set(duplicate_set)
            result.wasted_bytes += wasted_bytes

        result.files_scanned = self.state.scanned
        result.errors = self.state.errors
        stats.total_time += time.time() - total_start_time
        return result

    @staticmethod
    def _update_stats(
        stats: DetectionStats,
        stage: Stage,
        duration: float,
        groups_found: int,
        files_processed: int
    ):
        stats.update_stage(
            stage_name=stage.value,
            groups_found=groups_found,
            files_processed=files_processed,
            duration=duration
        )
