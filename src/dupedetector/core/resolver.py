"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Turns one size group into duplicate sets.

STRATEGIES
----------
Pair (exactly 2 files)  : direct byte comparison, stops at the first difference
Digest (3 or more files): every member is digested once, the group is sorted by
                          (digest, path) and runs of equal digests become sets

The pair special case exists because comparing two files can end after one
buffer, while digesting must read both files completely. For three or more
files, one full read per file beats comparing every pair.
"""

from typing import List, Tuple

from dupedetector.core.interfaces import DuplicateResolver, Digester, PairwiseComparator
from dupedetector.core.models import CandidateFile, SizeGroup, DuplicateSet, MatchMethod


class DuplicateResolverImpl(DuplicateResolver):

    def __init__(self, comparator: PairwiseComparator, digester: Digester):
        self.comparator = comparator
        self.digester = digester

    def resolve(self, group: SizeGroup) -> Tuple[List[DuplicateSet], int]:
        if len(group.files) < 2:
            return [], 0
        if len(group.files) == 2:
            return self.resolve_pair(group)
        return self.resolve_by_digest(group)

    def resolve_pair(self, group: SizeGroup) -> Tuple[List[DuplicateSet], int]:
        first, second = group.files
        if not self.comparator.contents_equal(first, second):
            return [], 0

        # Report in path order whatever order the pair arrived in.
        members = sorted((first, second), key=lambda f: f.path)
        duplicate_set = DuplicateSet(size=group.size, files=members, method=MatchMethod.CONTENT)
        return [duplicate_set], duplicate_set.wasted_bytes

    def sort_by_digest(self, files: List[CandidateFile]) -> List[CandidateFile]:
        """
        Two-key sort: digest bytes, then path. Computing the keys reads every file
        once; failed digests sort first.
        """
        return sorted(files, key=lambda f: (self.digester.compute_digest(f).sort_key, f.path))

    def resolve_by_digest(self, group: SizeGroup) -> Tuple[List[DuplicateSet], int]:
        ordered = self.sort_by_digest(group.files)

        duplicate_sets: List[DuplicateSet] = []
        matches: List[CandidateFile] = []
        previous = ordered[0]

        for file in ordered[1:]:
            # Digest equality never holds for failed digests.
            if file.digest == previous.digest:
                if not matches:
                    matches.append(previous)
                matches.append(file)
            elif matches:
                duplicate_sets.append(self._make_set(group.size, matches))
                matches = []
            previous = file

        if matches:
            duplicate_sets.append(self._make_set(group.size, matches))

        wasted_bytes = sum(s.wasted_bytes for s in duplicate_sets)
        return duplicate_sets, wasted_bytes

    @staticmethod
    def _make_set(size: int, files: List[CandidateFile]) -> DuplicateSet:
        return DuplicateSet(size=size, files=list(files), method=MatchMethod.DIGEST)
