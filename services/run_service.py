from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace

from copier_io.access import access_scope
from copier_io.free_space import free_bytes
from copier_io.path_utils import is_within, norm_abs_path
from domain.constants import ERROR_POLICY
from domain.errors import InvalidInputError, TypeCopierError
from domain.models import CopyRequest, RunResult
from domain.rules import normalize_extension
from services.executor_service import ExecutorService
from services.report_service import ReportService
from services.scan_service import ScanService


class RunService:
    """Find + copy + summarize for one request.

    run() does the work on the calling thread; submit() hands it to a single
    background worker and returns the Future.
    """

    def __init__(self, logger=None):
        self.logger = logger
        self.scan = ScanService(logger)
        self.executor = ExecutorService(logger=logger)
        self.report = ReportService()

    def _log(self, msg: str):
        if self.logger:
            self.logger.log(msg)

    def validate(self, request: CopyRequest) -> CopyRequest:
        ext = normalize_extension(request.extension)
        if not ext:
            raise InvalidInputError("File extension is required.")
        if not (request.source_root or "").strip():
            raise InvalidInputError("Source folder is required.")
        if not (request.dest_root or "").strip():
            raise InvalidInputError("Destination folder is required.")
        if request.error_policy not in ERROR_POLICY:
            raise InvalidInputError(f"Unknown error policy: {request.error_policy}")
        if request.retries < 0:
            raise InvalidInputError("Retries must be zero or more.")

        return replace(
            request,
            extension=ext,
            source_root=norm_abs_path(request.source_root.strip()),
            dest_root=norm_abs_path(request.dest_root.strip()),
        )

    def _preflight(self, request: CopyRequest, matches) -> None:
        if is_within(request.dest_root, request.source_root):
            self._log("WARNING: destination is inside the source folder")
        needed = sum(m.size for m in matches)
        try:
            free = free_bytes(request.dest_root)
        except OSError as e:
            self._log(f"WARNING: free space check failed: {type(e).__name__}: {e}")
            return
        if needed > free:
            self._log(f"WARNING: {needed} bytes to copy but only {free} bytes free at destination")

    def run(self, request: CopyRequest, progress_cb=None, stage_cb=None, skip_cb=None) -> RunResult:
        """Returns a RunResult for every input; fatal setup errors become status FATAL."""

        def _stage(msg: str):
            self._log(msg)
            if stage_cb:
                stage_cb(msg)

        try:
            request = self.validate(request)
            with access_scope(request.source_root, request.dest_root, self.logger):
                _stage("Searching files…")
                matches = self.scan.find(request.source_root, request.extension, skip_cb=skip_cb)

                _stage(f"Found: {len(matches)} files. Copying…")
                self._preflight(request, matches)
                outcome = self.executor.execute(
                    matches,
                    request.dest_root,
                    progress_cb=progress_cb,
                    verify=request.verify,
                    error_policy=request.error_policy,
                    retries=request.retries,
                )
        except TypeCopierError as e:
            result = self.report.fatal(e)
            _stage(f"FAILED [{e.kind}] {e}")
            return result

        result = self.report.summarize(outcome)
        _stage(result.message.replace("\n\n", " "))
        return result

    def submit(self, request: CopyRequest, progress_cb=None, stage_cb=None, skip_cb=None) -> Future:
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="typecopier")
        try:
            return pool.submit(self.run, request, progress_cb, stage_cb, skip_cb)
        finally:
            # worker thread finishes the job, the pool just stops accepting more
            pool.shutdown(wait=False)
