"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Direct byte-for-byte comparison of two same-sized files.

Used only when exactly two files share a size: reading stops at the first
differing chunk, which is usually far cheaper than digesting both files.
"""

import os
import logging

from dupedetector.core.models import CandidateFile, DEFAULT_BUFFER_SIZE
from dupedetector.core.interfaces import PairwiseComparator
from dupedetector.core.state import ScanState

logger = logging.getLogger(__name__)


class PairwiseComparatorImpl(PairwiseComparator):
    """
    Compares the primary data streams of two files in lock-step chunks.

    Any failure to stat, open, read or close either file is reported as a
    non-fatal error and the pair is treated as not equal. Two files come off
    the pending counter once the comparison finishes, whatever the outcome.
    """

    def __init__(self, state: ScanState, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.state = state
        self.buffer_size = buffer_size

    def contents_equal(self, first: CandidateFile, second: CandidateFile) -> bool:
        try:
            return self._compare(first, second)
        finally:
            self.state.reduce_pending(2)

    def _compare(self, first: CandidateFile, second: CandidateFile) -> bool:
        try:
            # Sizes were equal at scan time; they may have changed since.
            if os.path.getsize(first.path) != os.path.getsize(second.path):
                logger.debug(f"Size changed since scan: {first.path} / {second.path}")
                return False

            with open(first.path, 'rb') as stream0, open(second.path, 'rb') as stream1:
                while True:
                    chunk0 = stream0.read(self.buffer_size)
                    chunk1 = stream1.read(self.buffer_size)
                    if chunk0 != chunk1:
                        return False
                    # A short read means both streams ended together.
                    if len(chunk0) < self.buffer_size:
                        return True
        except OSError as e:
            self.state.report_error(
                f"These two files were not compared because one of them could not be read: "
                f"{first.path} and {second.path}", e
            )
            return False
