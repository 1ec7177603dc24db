"""
dupedetector — fast finder of exact duplicate files.

Core features:
- Size grouping: files with a unique size are never read
- Two same-sized files are compared byte for byte, stopping at the first difference
- Three or more same-sized files are each read once to compute a digest (SHA-256 by default)
- Cycle-safe traversal: symlinks are followed only when given as roots
- Read-only: nothing on disk is moved, changed or deleted
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupedetector")
except Exception:
    __version__ = "2019.2.27"

# Public API: only what users should import directly
from dupedetector.commands import DetectionCommand
from dupedetector.core import (
    DetectionParams, DetectionResult, DuplicateSet, CandidateFile, MatchMethod, InvalidRootError
)
from dupedetector.utils.convert_utils import ConvertUtils

__all__ = [
    "DetectionCommand",
    "DetectionParams",
    "DetectionResult",
    "DuplicateSet",
    "CandidateFile",
    "MatchMethod",
    "InvalidRootError",
    "ConvertUtils",
    "__version__",
]
