"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the detection engine.
These protocols enforce structural typing using Python's `typing.Protocol` so that
collaborators (error sinks, progress printers, hash algorithms) can be swapped
in tests and front-ends without touching the engine.

Key Components:
---------------
- ErrorSink: Receives every non-fatal (message, cause) pair.
- ProgressListener: Receives throttled progress ticks from ScanState.
- DigestAlgorithm / HashAccumulator: Pluggable hash functions (SHA-256, BLAKE2, xxHash).
- Digester: Computes and memoizes a file's content digest.
- PairwiseComparator: Byte-for-byte comparison of exactly two files.
- FileScanner: Builds the candidate list from root paths.
- FileGrouper: Partitions candidates into same-size groups.
- DuplicateResolver: Turns one size group into duplicate sets.
- Detector: Coordinates grouping and resolution for a whole candidate list.
"""

from typing import Protocol, List, Tuple, Optional, Callable
from dupedetector.core.models import (
    CandidateFile,
    Digest,
    SizeGroup,
    DuplicateSet,
    DetectionResult,
)


# ===== Collaborators =====

class ErrorSink(Protocol):
    def __call__(self, message: str, cause: Optional[BaseException]) -> None:
        ...


class ProgressListener(Protocol):
    def __call__(self, stage: str, state: "ScanStateView") -> None:
        ...


class ScanStateView(Protocol):
    """Read-only view of the run counters."""
    scanned: int
    pending: int
    errors: int


class HashAccumulator(Protocol):
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class DigestAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, BLAKE2 or xxHash
    without affecting the rest of the detection logic.
    """
    name: str

    @property
    def digest_size(self) -> int:
        ...

    def new(self) -> HashAccumulator:
        """Returns a fresh incremental accumulator."""
        ...


# ===== Engine components =====

class Digester(Protocol):
    """Interface for computing a file's full content digest."""
    def compute_digest(self, file: CandidateFile) -> Digest: ...


class PairwiseComparator(Protocol):
    """Interface for comparing the raw content of exactly two files."""
    def contents_equal(self, first: CandidateFile, second: CandidateFile) -> bool: ...


class FileScanner(Protocol):
    """
    Interface for walking root paths and collecting candidate files.

    Methods:
        scan: Returns every readable regular file passing the filters.
    """
    def scan(self) -> List[CandidateFile]:
        ...


class FileGrouper(Protocol):
    """Interface for grouping candidates by size."""
    def group_by_size(self, files: List[CandidateFile]) -> List[SizeGroup]:
        """Groups of 2+ files sharing a size, smallest size first."""
        ...


class DuplicateResolver(Protocol):
    """
    Interface for resolving one size group.

    Returns:
        Tuple of (duplicate sets found, bytes reclaimable by keeping one copy per set).
    """
    def resolve(self, group: SizeGroup) -> Tuple[List[DuplicateSet], int]:
        ...


class Detector(Protocol):
    """
    Interface for the detection pipeline.

    Coordinates size grouping and per-group resolution and collects statistics.
    """
    def find_duplicates(
        self,
        files: List[CandidateFile],
        on_duplicate_set: Optional[Callable[[DuplicateSet], None]] = None,
    ) -> DetectionResult:
        """
        Args:
            files: Candidates produced by a FileScanner.
            on_duplicate_set: Optional callback invoked as soon as each set is proven.

        Returns:
            DetectionResult with all duplicate sets and the reclaimable byte total.
        """
        ...
