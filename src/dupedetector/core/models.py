"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for candidate collection and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
from enum import Enum


# =============================
# Enums
# =============================

class DigestStatus(Enum):
    """State of a file's lazily computed content digest."""
    NOT_COMPUTED = "not-computed"
    COMPUTED = "computed"
    FAILED = "failed"


class MatchMethod(Enum):
    """
    How membership of a duplicate set was proven.
    """
    CONTENT = "content"
    DIGEST = "digest"

    @property
    def display_name(self) -> str:
        """Word used in the result header line."""
        mapping = {
            MatchMethod.CONTENT: "content-matched",
            MatchMethod.DIGEST: "digest-matched",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    COLLECT = "collect"
    SIZE = "size"
    COMPARE = "compare"
    DIGEST = "digest"

    @classmethod
    def get_all(cls):
        return [cls.COLLECT, cls.SIZE, cls.COMPARE, cls.DIGEST]


# ======================
#  Core Data Models
# ======================

class Digest:
    """
    Tagged digest value: not computed, computed(bytes) or failed.

    Equality means "proven same content": a failed digest never equals anything,
    not even another failed digest (or itself), so two broken reads can never
    be grouped together.
    """
    __slots__ = ("status", "value")

    def __init__(self, status: DigestStatus, value: bytes = b""):
        if status is DigestStatus.COMPUTED and not isinstance(value, bytes):
            raise ValueError("Computed digest must be bytes")
        self.status = status
        self.value = value if status is DigestStatus.COMPUTED else b""

    @classmethod
    def computed(cls, value: bytes) -> "Digest":
        return cls(DigestStatus.COMPUTED, value)

    @property
    def is_computed(self) -> bool:
        return self.status is DigestStatus.COMPUTED

    @property
    def is_error(self) -> bool:
        return self.status is DigestStatus.FAILED

    @property
    def sort_key(self) -> bytes:
        """Primary sort key. Failed digests sort first, like an empty digest."""
        return self.value

    def matches(self, other: "Digest") -> bool:
        return (
            self.status is DigestStatus.COMPUTED
            and other.status is DigestStatus.COMPUTED
            and self.value == other.value
        )

    def __eq__(self, other):
        if not isinstance(other, Digest):
            return NotImplemented
        return self.matches(other)

    __hash__ = None

    def __repr__(self):
        if self.is_computed:
            return f"<Digest {self.value.hex()}>"
        return f"<Digest {self.status.value}>"


DIGEST_NOT_COMPUTED = Digest(DigestStatus.NOT_COMPUTED)
DIGEST_ERROR = Digest(DigestStatus.FAILED)


@dataclass(eq=False)
class CandidateFile:
    """
    A regular file eligible for comparison.

    `size` is captured once at scan time and used for every grouping and sort
    decision afterwards; the on-disk size is only re-checked by the pairwise
    comparator right before reading.
    """
    path: str
    size: int  # in bytes
    digest: Digest = field(default_factory=lambda: DIGEST_NOT_COMPUTED)

    def __repr__(self):
        return f"<CandidateFile path={self.path}, size={self.size}>"


@dataclass
class SizeGroup:
    """Two or more candidates sharing one size."""
    size: int
    files: List[CandidateFile] = field(default_factory=list)

    def add_file(self, file: CandidateFile) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def __len__(self) -> int:
        return len(self.files)

    def __repr__(self):
        return f"<SizeGroup size={self.size}, count={len(self.files)}>"


@dataclass
class DuplicateSet:
    """
    Files believed to be byte-identical.
    Pairs are proven by full content comparison, larger sets by matching digests.
    """
    size: int
    files: List[CandidateFile]
    method: MatchMethod = MatchMethod.DIGEST

    @property
    def duplicate_count(self) -> int:
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def wasted_bytes(self) -> int:
        """Bytes reclaimed by keeping only the first member."""
        return max(0, self.duplicate_count - 1) * self.size

    def __repr__(self):
        return f"<DuplicateSet size={self.size}, count={len(self.files)}, method={self.method!r}>"


@dataclass
class DetectionStats:
    """
    Statistics collected while detecting duplicates.
    """
    total_time: float = 0.0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            Stage.COLLECT.value: "Candidate Collection",
            Stage.SIZE.value: "Size Groups",
            Stage.COMPARE.value: "Pairwise Comparison",
            Stage.DIGEST.value: "Digest Groups",
        }

        lines = [
            "Detection Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class DetectionResult:
    """Everything a reporting collaborator needs after a run."""
    duplicate_sets: List[DuplicateSet] = field(default_factory=list)
    wasted_bytes: int = 0
    files_scanned: int = 0
    candidates: int = 0
    errors: int = 0
    stats: Optional[DetectionStats] = None

    @property
    def total_duplicate_files(self) -> int:
        return sum(s.duplicate_count for s in self.duplicate_sets)


"""
DTO for detection parameters with built-in validation.
"""
from dupedetector.utils.convert_utils import ConvertUtils

DEFAULT_BUFFER_SIZE = 0x80000
DEFAULT_PROGRESS_INTERVAL = 0.2
DEFAULT_ALGORITHM = "sha256"


@dataclass
class DetectionParams:
    """Parameters for a detection run, validated on creation."""
    roots: List[str]
    min_size_bytes: int = 1
    excluded_patterns: List[str] = field(default_factory=list)
    algorithm: str = DEFAULT_ALGORITHM
    buffer_size: int = DEFAULT_BUFFER_SIZE
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("At least one file or directory must be specified")

        if any(not root for root in self.roots):
            raise ValueError("Paths cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.buffer_size <= 0:
            raise ValueError("Buffer size must be positive")

        if self.progress_interval < 0:
            raise ValueError("Progress interval cannot be negative")

        # Imported here: hasher imports this module.
        from dupedetector.core.hasher import is_supported
        if not is_supported(self.algorithm):
            raise ValueError(f"Unsupported digest algorithm: '{self.algorithm}'")

        self.excluded_patterns = [p for p in self.excluded_patterns if p]

    @staticmethod
    def from_human_readable(
            roots: List[str],
            min_size_str: str = "1",
            excluded_patterns: Optional[List[str]] = None,
            algorithm: str = DEFAULT_ALGORITHM,
    ) -> 'DetectionParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return DetectionParams(
            roots=list(roots),
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            excluded_patterns=list(excluded_patterns or []),
            algorithm=algorithm,
        )
