import os

from artifacts.report_writer import write_csv_and_summary
from domain.constants import (
    RUN_STATUS_ALL_SUCCEEDED,
    RUN_STATUS_FATAL,
    RUN_STATUS_NOTHING_TO_COPY,
    RUN_STATUS_PARTIAL,
)
from domain.errors import TypeCopierError
from domain.models import CopyOutcome, CopyRequest, ErrorInfo, ProgressSnapshot, RunResult
from utils.timeutil import run_stamp


class ReportService:
    """Turns snapshots and outcomes into the text the shells show."""

    def progress_line(self, snap: ProgressSnapshot) -> str:
        return f"Copied: {snap.copied} of {snap.total} files"

    def summarize(self, outcome: CopyOutcome) -> RunResult:
        if outcome.total == 0:
            return RunResult(RUN_STATUS_NOTHING_TO_COPY, outcome, "0 files found, nothing to copy.")

        if outcome.failures == 0:
            msg = f"All {outcome.successes} files were copied successfully!"
            return RunResult(RUN_STATUS_ALL_SUCCEEDED, outcome, msg)

        detail = outcome.last_error.message if outcome.last_error else "Unknown error"
        msg = (
            f"{outcome.successes} files copied, {outcome.failures} files could not be copied.\n\n"
            f"Last error: {detail}"
        )
        return RunResult(RUN_STATUS_PARTIAL, outcome, msg)

    def fatal(self, err: TypeCopierError, outcome: CopyOutcome | None = None) -> RunResult:
        return RunResult(
            RUN_STATUS_FATAL,
            outcome or CopyOutcome(),
            str(err),
            fatal_error=ErrorInfo(kind=err.kind, message=str(err)),
        )

    def produce(self, result: RunResult, artifacts_root: str, request: CopyRequest | None = None) -> dict:
        os.makedirs(artifacts_root, exist_ok=True)
        stamp = run_stamp()
        csv_path = os.path.join(artifacts_root, f"{stamp}_summary.csv")
        summary_path = os.path.join(artifacts_root, f"{stamp}_summary.txt")

        write_csv_and_summary(result, request, csv_path, summary_path)
        return {"csv": csv_path, "summary": summary_path}
