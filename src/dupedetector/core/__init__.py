"""
Core detection engine — scanner, grouper, comparator, digester, resolver and pipeline.

This package contains the performance-critical foundation of dupedetector:
- FileScannerImpl: cycle-safe traversal with exclusion and minimum-size filters
- FileGrouperImpl: size grouping that drops size-unique files
- PairwiseComparatorImpl: byte-for-byte comparison of two files with early exit
- DigesterImpl + HashlibAlgorithmImpl/XXHashAlgorithmImpl: streaming, memoized digests
- DuplicateResolverImpl: pair comparison or digest sort, per size group
- DetectorImpl: pipeline orchestrator (size → resolution) with statistics
- ScanState: scanned/pending/error counters and throttled progress
- Models: CandidateFile, Digest, SizeGroup, DuplicateSet and configuration objects

All components are pure Python and never modify the files they read.
"""

from .scanner import FileScannerImpl, InvalidRootError
from .grouper import FileGrouperImpl
from .comparator import PairwiseComparatorImpl
from .hasher import (
    DigesterImpl, HashlibAlgorithmImpl, XXHashAlgorithmImpl, UnsupportedAlgorithmError,
    get_algorithm, is_supported, is_collision_resistant, available_algorithms)
from .resolver import DuplicateResolverImpl
from .detector import DetectorImpl
from .state import ScanState
from .exclusions import build_exclusion_matcher
from .models import (
    CandidateFile, Digest, DigestStatus, DIGEST_ERROR, DIGEST_NOT_COMPUTED, SizeGroup,
    DuplicateSet, MatchMethod, DetectionParams, DetectionStats, DetectionResult, Stage)

__all__ = [
    "FileScannerImpl",
    "InvalidRootError",
    "FileGrouperImpl",
    "PairwiseComparatorImpl",
    "DigesterImpl",
    "HashlibAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "UnsupportedAlgorithmError",
    "get_algorithm",
    "is_supported",
    "is_collision_resistant",
    "available_algorithms",
    "DuplicateResolverImpl",
    "DetectorImpl",
    "ScanState",
    "build_exclusion_matcher",
    "CandidateFile",
    "Digest",
    "DigestStatus",
    "DIGEST_ERROR",
    "DIGEST_NOT_COMPUTED",
    "SizeGroup",
    "DuplicateSet",
    "MatchMethod",
    "DetectionParams",
    "DetectionStats",
    "DetectionResult",
    "Stage",
]
