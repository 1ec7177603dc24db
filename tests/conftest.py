"""
Shared fixtures for detection tests.
Creates isolated temporary directories with controlled test files.
"""
import io
import pytest
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dupedetector.core.state import ScanState


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Canonical temporary directory (tmp may itself sit behind a symlink)."""
    return tmp_path.resolve()


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for detection scenarios:
    - a pair of identical 1 kB files (content-matched)
    - three identical 2 kB files (digest-matched)
    - a file with a unique size
    - an empty file (below the default minimum size)
    - a subdirectory holding another copy of the 1 kB content
    """
    files = {}

    content_a = b"A" * 1000
    files["pair_a"] = temp_dir / "pair_a.txt"
    files["pair_b"] = temp_dir / "pair_b.txt"
    files["pair_a"].write_bytes(content_a)
    files["pair_b"].write_bytes(content_a)

    content_b = b"B" * 2000
    for name in ("triple_1", "triple_2", "triple_3"):
        files[name] = temp_dir / f"{name}.bin"
        files[name].write_bytes(content_b)

    files["unique"] = temp_dir / "unique.txt"
    files["unique"].write_bytes(b"C" * 1500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_copy"] = subdir / "copy.txt"
    files["sub_copy"].write_bytes(b"S" * 3000)
    files["sub_copy_2"] = subdir / "copy_2.txt"
    files["sub_copy_2"].write_bytes(b"S" * 3000)

    return files


class ErrorCollector:
    """Error sink that remembers every (message, cause) pair."""

    def __init__(self):
        self.errors: List[Tuple[str, Optional[BaseException]]] = []

    def __call__(self, message: str, cause: Optional[BaseException]) -> None:
        self.errors.append((message, cause))

    @property
    def messages(self) -> List[str]:
        return [message for message, _ in self.errors]


@pytest.fixture
def error_collector() -> ErrorCollector:
    return ErrorCollector()


@pytest.fixture
def state(error_collector) -> ScanState:
    """ScanState whose errors land in `error_collector` instead of the log."""
    return ScanState(error_sink=error_collector)


class FailingCloseFile(io.FileIO):
    """Raw file whose first close() fails after releasing the descriptor."""

    def close(self):
        already_closed = self.closed
        super().close()
        if not already_closed:
            raise OSError("Input/output error on close")


@pytest.fixture
def open_failing_close():
    """Drop-in for open() whose streams read normally but fail on close."""
    def _open(path, mode="rb", *args, **kwargs):
        return FailingCloseFile(path, "r")
    return _open
