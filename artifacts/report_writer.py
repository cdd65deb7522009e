import csv

from domain.models import CopyRequest, RunResult


def write_csv_and_summary(result: RunResult, request: CopyRequest | None, csv_path: str, summary_path: str):
    o = result.outcome
    last_error = o.last_error.message if o.last_error else ""

    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        if request:
            w.writerow(["extension", request.extension])
            w.writerow(["source_root", request.source_root])
            w.writerow(["dest_root", request.dest_root])
            w.writerow([])
        w.writerow(["field", "value"])
        w.writerow(["status", result.status])
        w.writerow(["total", o.total])
        w.writerow(["successes", o.successes])
        w.writerow(["failures", o.failures])
        w.writerow(["renamed", o.renamed])
        w.writerow(["bytes_copied", o.bytes_copied])
        w.writerow(["last_error", last_error])
        if result.fatal_error:
            w.writerow(["fatal_error", f"{result.fatal_error.kind}: {result.fatal_error.message}"])

    lines = []
    if request:
        lines.append(f"Extension: {request.extension}")
        lines.append(f"Source: {request.source_root}")
        lines.append(f"Destination: {request.dest_root}")
        lines.append("")
    lines.append("Summary")
    lines.append(f"- Status: {result.status}")
    lines.append(f"- Files found: {o.total}")
    lines.append(f"- Copied: {o.successes}")
    lines.append(f"- Failed: {o.failures}")
    lines.append(f"- Name collisions: {o.renamed}")
    lines.append(f"- Bytes copied: {o.bytes_copied}")
    if last_error:
        lines.append(f"- Last error: {last_error}")
    lines.append("")
    lines.append(result.message)

    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
