import contextlib
import os

from copier_io.access import check_dest
from copier_io.file_copy import copy_stream
from copier_io.hash_stream import file_digest
from domain.errors import CopyError, DirectoryCreationError
from domain.models import CopyOutcome, CopyPlan, ErrorInfo, FileMatch, ProgressSnapshot
from services.planner_service import PlannerService


class ExecutorService:
    def __init__(self, planner: PlannerService | None = None, logger=None):
        self.planner = planner or PlannerService(logger)
        self.logger = logger

    def _log(self, msg: str):
        if self.logger:
            self.logger.log(msg)

    def prepare_destination(self, dest_root: str) -> None:
        check_dest(dest_root)
        if os.path.isdir(dest_root):
            return
        try:
            os.makedirs(dest_root, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(
                f"Destination folder could not be created: {type(e).__name__}: {e}"
            ) from e
        self._log(f"Created destination folder {dest_root}")

    def copy_one(self, plan: CopyPlan, verify: bool = False) -> int:
        src, dst = plan.match.path, plan.dest_path
        try:
            copied = copy_stream(src, dst)
        except OSError as e:
            raise CopyError(f"{type(e).__name__}: {e}") from e

        if verify:
            try:
                same = file_digest(src) == file_digest(dst)
            except OSError as e:
                raise CopyError(f"{type(e).__name__}: {e}", code="VERIFY_FAIL") from e
            if not same:
                with contextlib.suppress(OSError):
                    os.remove(dst)
                raise CopyError(f"BLAKE3 mismatch after copy: {dst}", code="VERIFY_FAIL")
        return copied

    def execute(
        self,
        matches: list[FileMatch],
        dest_root: str,
        progress_cb=None,
        verify: bool = False,
        error_policy: str = "SKIP",
        retries: int = 2,
    ) -> CopyOutcome:
        """Copy every match into dest_root, one after another.

        Destination setup failures raise (DirectoryCreationError, AccessError)
        before any file is touched. Per-file failures never raise: they are
        counted and the last one is kept in the outcome.
        progress_cb(ProgressSnapshot) is called after each successful copy.
        """
        self.prepare_destination(dest_root)

        total = len(matches)
        successes = 0
        failures = 0
        renamed = 0
        bytes_copied = 0
        last_error = None

        for m in matches:
            attempt = 0
            while True:
                attempt += 1
                # re-plan on every attempt so a name taken since the last try is skipped
                plan = self.planner.plan(m, dest_root)
                try:
                    bytes_copied += self.copy_one(plan, verify=verify)
                except CopyError as e:
                    if error_policy == "RETRY_THEN_SKIP" and attempt <= retries:
                        self._log(f"[RETRY {attempt}/{retries}] {m.path}: {e}")
                        continue

                    failures += 1
                    last_error = ErrorInfo(kind=e.kind, message=str(e))
                    self._log(f"[{e.code}] {m.path} -> {plan.dest_path}: {e}")
                    break

                successes += 1
                if plan.collision_suffix:
                    renamed += 1
                if progress_cb:
                    progress_cb(ProgressSnapshot(successes, total, m.path, plan.dest_path))
                break

        return CopyOutcome(
            total=total,
            successes=successes,
            failures=failures,
            last_error=last_error,
            bytes_copied=bytes_copied,
            renamed=renamed,
        )
