"""
End-to-end tests of the detection workflow through DetectionCommand and DetectorImpl.
"""
import random
import pytest

from dupedetector.commands import DetectionCommand
from dupedetector.core.detector import DetectorImpl
from dupedetector.core.models import DetectionParams, MatchMethod, Stage, CandidateFile
from dupedetector.core.scanner import InvalidRootError
from dupedetector.core.state import ScanState


def run(roots, **kwargs):
    params = DetectionParams(roots=[str(r) for r in roots], **kwargs)
    return DetectionCommand().execute(params, error_sink=lambda message, cause: None)


def as_sets(result):
    return [(s.size, s.method, s.paths) for s in result.duplicate_sets]


class TestDetectionCommand:

    def test_finds_all_sets_in_size_order(self, temp_dir, test_files):
        result = run([temp_dir])

        assert as_sets(result) == [
            (1000, MatchMethod.CONTENT, [str(test_files["pair_a"]), str(test_files["pair_b"])]),
            (2000, MatchMethod.DIGEST, [str(test_files[n]) for n in ("triple_1", "triple_2", "triple_3")]),
            (3000, MatchMethod.CONTENT, [str(test_files["sub_copy"]), str(test_files["sub_copy_2"])]),
        ]
        assert result.wasted_bytes == 1000 + 2 * 2000 + 3000
        assert result.errors == 0
        assert result.candidates == 8
        assert result.files_scanned == 11

    def test_callback_receives_sets_as_found(self, temp_dir, test_files):
        received = []
        params = DetectionParams(roots=[str(temp_dir)])
        result = DetectionCommand().execute(params, on_duplicate_set=received.append)
        assert received == result.duplicate_sets

    def test_stage_callbacks(self, temp_dir, test_files):
        stages = []
        params = DetectionParams(roots=[str(temp_dir)])
        DetectionCommand().execute(
            params, on_stage_complete=lambda stage, state: stages.append((stage, state.scanned, state.pending))
        )
        # Pending is counted right after size grouping: 2 + 3 + 2 grouped files
        assert stages == [(Stage.COLLECT, 11, 0), (Stage.SIZE, 11, 7)]

    def test_pending_returns_to_zero(self, temp_dir, test_files):
        command = DetectionCommand()
        command.execute(DetectionParams(roots=[str(temp_dir)]))
        assert command.state.pending == 0

    def test_min_size_excludes_smaller_twins(self, temp_dir):
        (temp_dir / "small_1").write_bytes(b"s" * 50)
        (temp_dir / "small_2").write_bytes(b"s" * 50)
        (temp_dir / "big_1").write_bytes(b"b" * 150)
        (temp_dir / "big_2").write_bytes(b"b" * 150)

        result = run([temp_dir], min_size_bytes=100)
        assert [s.size for s in result.duplicate_sets] == [150]

    def test_exclusions_apply(self, temp_dir, test_files):
        result = run([temp_dir], excluded_patterns=["subdir"])
        assert 3000 not in [s.size for s in result.duplicate_sets]

    def test_no_duplicates(self, temp_dir):
        (temp_dir / "one").write_bytes(b"1")
        (temp_dir / "two").write_bytes(b"22")
        result = run([temp_dir])
        assert result.duplicate_sets == []
        assert result.wasted_bytes == 0

    def test_xxhash_algorithm(self, temp_dir, test_files):
        result = run([temp_dir], algorithm="xxh3_128")
        assert len(result.duplicate_sets) == 3

    def test_bad_root_is_fatal(self, temp_dir):
        with pytest.raises(InvalidRootError):
            run([temp_dir / "missing"])

    def test_bad_regex_is_fatal(self, temp_dir):
        with pytest.raises(ValueError, match="regex"):
            run([temp_dir], excluded_patterns=["[unclosed"])

    def test_collected_files_are_copied(self, temp_dir, test_files):
        command = DetectionCommand()
        command.execute(DetectionParams(roots=[str(temp_dir)]))
        files = command.get_files()
        files.clear()
        assert len(command.get_files()) == 8

    def test_idempotent(self, temp_dir, test_files):
        first, second = run([temp_dir]), run([temp_dir])
        assert as_sets(first) == as_sets(second)
        assert first.wasted_bytes == second.wasted_bytes

    def test_file_argument_order_does_not_change_sets(self, temp_dir):
        a = temp_dir / "a.dat"
        b = temp_dir / "b.dat"
        a.write_bytes(b"same bytes")
        b.write_bytes(b"same bytes")
        assert as_sets(run([a, b])) == as_sets(run([b, a])) == [
            (10, MatchMethod.CONTENT, [str(a), str(b)])
        ]

    def test_root_order_does_not_change_sets(self, temp_dir, test_files):
        forward = run([temp_dir / "subdir", temp_dir])
        backward = run([temp_dir, temp_dir / "subdir"])
        assert sorted(as_sets(forward)) == sorted(as_sets(backward))

    def test_stats_are_recorded(self, temp_dir, test_files):
        result = run([temp_dir])
        assert set(result.stats.stage_stats) == {"collect", "size", "compare", "digest"}
        assert result.stats.stage_stats["compare"]["groups"] == 2
        assert result.stats.stage_stats["digest"]["groups"] == 1


class TestDetectorImpl:

    def test_input_order_does_not_change_sets(self, temp_dir, test_files):
        files = [CandidateFile(str(p), p.stat().st_size) for p in test_files.values() if p.stat().st_size]
        expected = as_sets(DetectorImpl(ScanState()).find_duplicates(list(files)))

        shuffled = [CandidateFile(f.path, f.size) for f in files]
        random.Random(7).shuffle(shuffled)
        assert as_sets(DetectorImpl(ScanState()).find_duplicates(shuffled)) == expected

    def test_error_during_digest_is_counted(self, temp_dir, error_collector):
        for name in ("a", "b", "c"):
            (temp_dir / name).write_bytes(b"same")
        files = [CandidateFile(str(temp_dir / n), 4) for n in ("a", "b", "c")]
        (temp_dir / "c").unlink()
        state = ScanState(error_sink=error_collector)

        result = DetectorImpl(state).find_duplicates(files)

        assert [s.paths for s in result.duplicate_sets] == [[str(temp_dir / "a"), str(temp_dir / "b")]]
        assert result.errors == 1
        assert state.pending == 0

    def test_on_grouped_sees_groups_before_reading(self, temp_dir):
        files = [CandidateFile(str(temp_dir / n), 4) for n in ("missing_1", "missing_2")]
        seen = []
        state = ScanState(error_sink=lambda message, cause: None)
        DetectorImpl(state).find_duplicates(files, on_grouped=lambda groups: seen.append((len(groups), state.errors)))
        assert seen == [(1, 0)]
        assert state.errors == 1

