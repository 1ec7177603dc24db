"""
Unit tests for FileGrouperImpl.
Verifies size grouping and the pending counter it feeds.
"""
from dupedetector.core.grouper import FileGrouperImpl
from dupedetector.core.models import CandidateFile
from dupedetector.core.state import ScanState


class TestFileGrouperImpl:
    """Test file grouping by size."""

    def test_groups_by_size_filters_single_files(self):
        files = [
            CandidateFile(path="/a.txt", size=1024),
            CandidateFile(path="/b.txt", size=1024),  # Same size → group
            CandidateFile(path="/c.txt", size=2048),  # Single file → dropped
        ]

        groups = FileGrouperImpl().group_by_size(files)

        assert len(groups) == 1
        assert groups[0].size == 1024
        assert [f.path for f in groups[0].files] == ["/a.txt", "/b.txt"]

    def test_groups_in_ascending_size_order(self):
        files = [
            CandidateFile("/big1", 300), CandidateFile("/small1", 10),
            CandidateFile("/big2", 300), CandidateFile("/small2", 10),
            CandidateFile("/mid", 20),
        ]
        groups = FileGrouperImpl().group_by_size(files)
        assert [g.size for g in groups] == [10, 300]

    def test_stable_within_group(self):
        """Files keep their scan order inside a group."""
        files = [CandidateFile(f"/{n}", 5) for n in ("z", "a", "m")]
        groups = FileGrouperImpl().group_by_size(files)
        assert [f.path for f in groups[0].files] == ["/z", "/a", "/m"]

    def test_pending_counts_every_grouped_file(self):
        state = ScanState()
        files = [
            CandidateFile("/a", 1), CandidateFile("/b", 1), CandidateFile("/c", 1),
            CandidateFile("/d", 2), CandidateFile("/e", 2),
            CandidateFile("/f", 3),
        ]
        FileGrouperImpl(state).group_by_size(files)
        assert state.pending == 5

    def test_empty_and_single_input(self):
        assert FileGrouperImpl().group_by_size([]) == []
        assert FileGrouperImpl().group_by_size([CandidateFile("/a", 1)]) == []

    def test_all_unique_sizes(self):
        files = [CandidateFile(f"/{i}", i) for i in range(1, 6)]
        assert FileGrouperImpl().group_by_size(files) == []
