"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements size grouping of candidate files.
No file content is read here: sizes were captured by the scanner.
"""

from typing import List, Optional

from dupedetector.core.interfaces import FileGrouper
from dupedetector.core.models import CandidateFile, SizeGroup
from dupedetector.core.state import ScanState


class FileGrouperImpl(FileGrouper):
    """
    Groups candidates sharing a size. Sizes held by a single file are dropped,
    since such a file cannot have a duplicate.
    """

    def __init__(self, state: Optional[ScanState] = None):
        self.state = state

    def group_by_size(self, files: List[CandidateFile]) -> List[SizeGroup]:
        """
        Stable-sorts by size and scans once. A group is opened only when a second
        file of the same size turns up; the first one joins it then.
        Every file placed in a group counts as one pending file.
        """
        groups: List[SizeGroup] = []
        if len(files) < 2:
            return groups

        ordered = sorted(files, key=lambda f: f.size)
        previous = ordered[0]
        group: Optional[SizeGroup] = None

        for file in ordered[1:]:
            if file.size == previous.size:
                if group is None:
                    group = SizeGroup(size=file.size, files=[previous])
                    groups.append(group)
                    self._add_pending(1)
                group.add_file(file)
                self._add_pending(1)
            else:
                previous = file
                group = None

        return groups

    def _add_pending(self, count: int) -> None:
        if self.state is not None:
            self.state.add_pending(count)
