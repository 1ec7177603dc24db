"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements candidate collection: walks root paths and builds the list of files to compare.
Features:
- Root arguments are canonicalized once, up front, so a symlink named on the
  command line is followed exactly once
- Symlinks met while descending are never followed, which keeps cyclic
  directory links from looping forever
- Every canonical path is scanned at most once, even when reached through
  overlapping or nested root arguments
- Applies the exclusion predicate (before descending) and the minimum size filter
- Uses an explicit stack instead of recursion, so depth is bounded by memory only
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Callable, Set

from dupedetector.core.models import CandidateFile
from dupedetector.core.interfaces import FileScanner
from dupedetector.core.state import ScanState

logger = logging.getLogger(__name__)


class InvalidRootError(ValueError):
    """A root argument cannot be read or canonicalized. Fatal for the whole run."""


class FileScannerImpl(FileScanner):
    """
    Scans files and directory trees and collects readable regular files.

    Attributes:
        roots: Files or directories to scan, in order
        state: Run counters; every visited entry increments `scanned`
        exclusion: Predicate over entry paths; matching entries are skipped without descending
        min_size: Minimum file size in bytes
    """

    def __init__(
        self,
        roots: List[str],
        state: ScanState,
        exclusion: Optional[Callable[[str], bool]] = None,
        min_size: int = 1
    ):
        self.roots = list(roots)
        self.state = state
        self.exclusion = exclusion
        self.min_size = min_size
        self.visited: Set[str] = set()

    @staticmethod
    def resolve_root(path: str) -> str:
        """
        Returns the canonical form of a root argument.
        Raises InvalidRootError if it cannot be read or resolved.
        """
        if not os.access(path, os.R_OK):
            raise InvalidRootError(f"This file could not be read: {path}")
        try:
            return str(Path(path).resolve(strict=True))
        except (OSError, RuntimeError) as e:
            raise InvalidRootError(f"This file's canonical path could not be determined: {path}") from e

    def scan(self) -> List[CandidateFile]:
        """
        Walks every root depth-first and returns the candidates in visiting order.
        All roots are resolved before the first one is walked.
        """
        canonical_roots = [self.resolve_root(root) for root in self.roots]
        logger.debug(f"Roots: {canonical_roots}")
        logger.debug(f"Filters: min_size={self.min_size}, exclusion={'yes' if self.exclusion else 'no'}")

        found_files: List[CandidateFile] = []
        for root in canonical_roots:
            stack = [root]
            while stack:
                entry = stack.pop()
                # Per-entry OSErrors are reported inside _visit. Anything else is a
                # programming error: the entry is still counted, then the scan aborts.
                try:
                    self._visit(entry, stack, found_files)
                finally:
                    self.state.file_scanned()

        logger.debug(f"Scan completed. {self.state.scanned} entries, {len(found_files)} candidates.")
        return found_files

    def _visit(self, entry: str, stack: List[str], found_files: List[CandidateFile]) -> None:
        if self.exclusion is not None and self.exclusion(entry):
            logger.debug(f"Skipping excluded path: {entry}")
            return

        try:
            canonical = str(Path(entry).resolve())
        except (OSError, RuntimeError) as e:
            self.state.report_error(
                f"This file could not be compared because its canonical path could not be determined: {entry}", e
            )
            return

        # A symlink's absolute path differs from its canonical path.
        if canonical != os.path.abspath(entry):
            logger.debug(f"Skipping symbolic link: {entry}")
            return
        if canonical in self.visited:
            logger.debug(f"Skipping already scanned path: {entry}")
            return
        self.visited.add(canonical)

        if os.path.isdir(entry):
            try:
                names = sorted(os.listdir(entry))
            except OSError as e:
                self.state.report_error(f"This folder could not be scanned: {entry}", e)
                return
            # Reversed so that children pop off the stack in name order.
            stack.extend(os.path.join(entry, name) for name in reversed(names))
        elif os.path.isfile(entry):
            file = self._process_file(entry)
            if file:
                found_files.append(file)

    def _process_file(self, path: str) -> Optional[CandidateFile]:
        """
        Returns a CandidateFile if the file passes the size filter and is readable.
        """
        try:
            size = os.stat(path).st_size
        except OSError as e:
            self.state.report_error(f"This file could not be compared because its size is unknown: {path}", e)
            return None

        if size < self.min_size:
            logger.debug(f"Skipping {path} (size {size} bytes below minimum)")
            return None

        if not os.access(path, os.R_OK):
            self.state.report_error(
                f"This file could not be compared because it could not be read: {path}",
                PermissionError(f"Permission denied: '{path}'")
            )
            return None

        logger.debug(f"Accepted file: {path} ({size} bytes)")
        return CandidateFile(path=path, size=size)
