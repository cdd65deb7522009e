"""Tests for the collision-safe copier."""

import os

import pytest

import copier_io.file_copy as file_copy_module
import services.executor_service as executor_module
from domain.constants import ERROR_KIND_COPY
from domain.errors import AccessError, DirectoryCreationError
from domain.models import CopyOutcome
from services.executor_service import ExecutorService
from services.scan_service import ScanService


@pytest.fixture
def source(tmp_path, make_tree):
    return make_tree(tmp_path / "src", {"a.jpg": b"AAA", "nested/b.jpg": b"BB", "c.jpg": b"C"})


def find(root, ext="jpg"):
    return ScanService().find(str(root), ext)


class TestDestinationSetup:
    def test_creates_missing_destination_with_intermediates(self, source, tmp_path):
        dest = tmp_path / "out" / "deeper" / "flat"

        outcome = ExecutorService().execute(find(source), str(dest))

        assert dest.is_dir()
        assert sorted(os.listdir(dest)) == ["a.jpg", "b.jpg", "c.jpg"]
        assert outcome.successes == 3

    def test_existing_destination_not_wiped(self, source, tmp_path):
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "keep.txt").write_text("keep")

        ExecutorService().execute(find(source), str(dest))

        assert (dest / "keep.txt").read_text() == "keep"

    def test_uncreatable_destination_is_fatal(self, source, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a folder")
        calls = []

        with pytest.raises(DirectoryCreationError):
            ExecutorService().execute(find(source), str(blocker / "sub"), progress_cb=calls.append)

        assert calls == []

    def test_destination_that_is_a_file_is_fatal(self, source, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a folder")

        with pytest.raises(AccessError):
            ExecutorService().execute(find(source), str(blocker))

        assert blocker.read_text() == "not a folder"


class TestCopy:
    def test_content_copied_flat_and_source_kept(self, source, tmp_path):
        dest = tmp_path / "out"

        outcome = ExecutorService().execute(find(source), str(dest))

        assert (dest / "a.jpg").read_bytes() == b"AAA"
        assert (dest / "b.jpg").read_bytes() == b"BB"
        assert (source / "nested" / "b.jpg").read_bytes() == b"BB"
        assert outcome == CopyOutcome(total=3, successes=3, failures=0, last_error=None, bytes_copied=6)

    def test_existing_name_gets_suffix(self, tmp_path, make_tree, matches_for):
        src = make_tree(tmp_path / "src", {"a.jpg": b"new"})
        dest = make_tree(tmp_path / "out", {"a.jpg": b"old"})

        outcome = ExecutorService().execute(matches_for(src / "a.jpg"), str(dest))

        assert (dest / "a.jpg").read_bytes() == b"old"
        assert (dest / "a_1.jpg").read_bytes() == b"new"
        assert outcome.renamed == 1

    def test_same_name_from_different_folders(self, tmp_path, make_tree):
        src = make_tree(tmp_path / "src", {"x/a.jpg": b"1", "y/a.jpg": b"2", "z/a.jpg": b"3"})
        dest = tmp_path / "out"

        ExecutorService().execute(find(src), str(dest))

        assert sorted(os.listdir(dest)) == ["a.jpg", "a_1.jpg", "a_2.jpg"]
        contents = sorted((dest / n).read_bytes() for n in os.listdir(dest))
        assert contents == [b"1", b"2", b"3"]

    def test_repeated_runs_never_overwrite(self, source, tmp_path):
        dest = tmp_path / "out"
        matches = find(source)

        for _ in range(3):
            outcome = ExecutorService().execute(matches, str(dest))
            assert outcome.successes == 3

        assert sorted(os.listdir(dest)) == [
            "a.jpg", "a_1.jpg", "a_2.jpg",
            "b.jpg", "b_1.jpg", "b_2.jpg",
            "c.jpg", "c_1.jpg", "c_2.jpg",
        ]
        assert (dest / "a_2.jpg").read_bytes() == b"AAA"

    def test_progress_after_each_success(self, source, tmp_path):
        snaps = []

        ExecutorService().execute(find(source), str(tmp_path / "out"), progress_cb=snaps.append)

        assert [(s.copied, s.total) for s in snaps] == [(1, 3), (2, 3), (3, 3)]
        assert all(os.path.exists(s.dest_path) for s in snaps)

    def test_zero_matches(self, tmp_path):
        dest = tmp_path / "out"

        outcome = ExecutorService().execute([], str(dest))

        assert outcome == CopyOutcome()
        assert outcome.completed
        assert dest.is_dir()


class TestPerFileFailures:
    def test_failure_does_not_stop_batch(self, source, tmp_path, monkeypatch, logger):
        real_copy = executor_module.copy_stream

        def flaky(src, dst, *args, **kwargs):
            if os.path.basename(src) == "b.jpg":
                raise OSError(5, "Input/output error")
            return real_copy(src, dst, *args, **kwargs)

        monkeypatch.setattr(executor_module, "copy_stream", flaky)
        dest = tmp_path / "out"

        outcome = ExecutorService(logger=logger).execute(find(source), str(dest))

        assert outcome.successes == 2
        assert outcome.failures == 1
        assert outcome.successes + outcome.failures == outcome.total
        assert outcome.last_error.kind == ERROR_KIND_COPY
        assert "Input/output error" in outcome.last_error.message
        assert sorted(os.listdir(dest)) == ["a.jpg", "c.jpg"]
        assert any(line.startswith("[COPY_FAIL]") for line in logger.lines)

    def test_only_last_error_kept(self, source, tmp_path, monkeypatch):
        def always_fail(src, dst, *args, **kwargs):
            raise OSError(28, f"No space left on device: {os.path.basename(src)}")

        monkeypatch.setattr(executor_module, "copy_stream", always_fail)
        matches = find(source)

        outcome = ExecutorService().execute(matches, str(tmp_path / "out"))

        assert outcome.failures == 3
        assert outcome.successes == 0
        assert matches[-1].name in outcome.last_error.message

    def test_retry_then_skip_replans(self, source, tmp_path, monkeypatch):
        real_copy = executor_module.copy_stream
        seen = []

        def racy(src, dst, *args, **kwargs):
            seen.append(os.path.basename(dst))
            if len(seen) == 1:
                raise FileExistsError(17, "File exists", dst)
            return real_copy(src, dst, *args, **kwargs)

        monkeypatch.setattr(executor_module, "copy_stream", racy)

        outcome = ExecutorService().execute(
            find(source), str(tmp_path / "out"), error_policy="RETRY_THEN_SKIP", retries=1
        )

        assert outcome.failures == 0
        assert outcome.successes == 3

    def test_retries_exhausted(self, source, tmp_path, monkeypatch):
        attempts = []

        def broken(src, dst, *args, **kwargs):
            attempts.append(src)
            raise OSError(5, "Input/output error")

        monkeypatch.setattr(executor_module, "copy_stream", broken)

        outcome = ExecutorService().execute(
            find(source), str(tmp_path / "out"), error_policy="RETRY_THEN_SKIP", retries=2
        )

        assert len(attempts) == 9
        assert outcome.failures == 3


    def test_failed_retries_leave_no_copies(self, tmp_path, make_tree, monkeypatch, matches_for):
        src = make_tree(tmp_path / "src", {"a.jpg": b"AAA"})
        dest = tmp_path / "out"

        def no_metadata(*args, **kwargs):
            raise PermissionError(1, "Operation not permitted")

        monkeypatch.setattr(file_copy_module.shutil, "copystat", no_metadata)

        outcome = ExecutorService().execute(
            matches_for(src / "a.jpg"), str(dest), error_policy="RETRY_THEN_SKIP", retries=2
        )

        assert outcome.successes == 0
        assert outcome.failures == 1
        assert os.listdir(dest) == []


class TestVerify:
    def test_verified_copy(self, source, tmp_path):
        outcome = ExecutorService().execute(find(source), str(tmp_path / "out"), verify=True)
        assert outcome.successes == 3

    def test_digest_mismatch_is_a_copy_failure(self, source, tmp_path, monkeypatch):
        monkeypatch.setattr(executor_module, "file_digest", lambda path: path)
        dest = tmp_path / "out"

        outcome = ExecutorService().execute(find(source), str(dest), verify=True)

        assert outcome.failures == 3
        assert "BLAKE3 mismatch" in outcome.last_error.message
        assert os.listdir(dest) == []
