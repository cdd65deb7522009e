# cli.py: find files by extension under a source tree and copy them flat into
# one destination folder, with a tqdm progress bar for the copy phase.

import argparse
import json
import queue
import sys
from collections import Counter
from pathlib import Path
from typing import Dict, Any

import yaml
from tqdm import tqdm

from artifacts.logger import RunLogger
from domain.constants import RUN_STATUS_FATAL, RUN_STATUS_PARTIAL
from domain.models import CopyRequest
from services.run_service import RunService


# ---------------------------
# Helpers
# ---------------------------

def load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if p.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return json.loads(p.read_text(encoding="utf-8"))


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if v is not None:
            out[k] = v
    return out


def tqdm_enabled() -> bool:
    return sys.stderr.isatty()


def exit_code(status: str) -> int:
    if status == RUN_STATUS_FATAL:
        return 1
    if status == RUN_STATUS_PARTIAL:
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typecopier",
        description="Copy every file with a given extension from a folder tree into one folder"
    )

    parser.add_argument("--config", help="Config file (json or yaml)")
    parser.add_argument("--extension", "-e", help="File extension, e.g. jpg, pdf, txt")
    parser.add_argument("--source", help="Source folder")
    parser.add_argument("--dest", help="Destination folder (created if missing)")

    parser.add_argument("--verify", action="store_true", default=None, help="Compare BLAKE3 digests after each copy")
    parser.add_argument("--error-policy", choices=["SKIP", "RETRY_THEN_SKIP"], help="What to do when a file fails")
    parser.add_argument("--retries", type=int, help="Retries per file with RETRY_THEN_SKIP")

    parser.add_argument("--log-file", help="Write logs to file")
    parser.add_argument("--summary-dir", help="Write summary .txt/.csv into this folder")
    return parser


# ---------------------------
# CLI main
# ---------------------------

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg_file = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        parser.error(f"cannot read config: {e}")

    cli_cfg = {
        "extension": args.extension,
        "source": args.source,
        "dest": args.dest,
        "verify": args.verify,
        "error_policy": args.error_policy,
        "retries": args.retries,
        "log_file": args.log_file,
        "summary_dir": args.summary_dir,
    }

    cfg = merge_config(cfg_file, cli_cfg)

    if not cfg.get("extension") or not cfg.get("source") or not cfg.get("dest"):
        parser.error("extension, source and dest are required (flags or config file)")

    bars_on = tqdm_enabled()
    logger = RunLogger(cfg.get("log_file"), echo=tqdm.write)

    request = CopyRequest(
        extension=str(cfg["extension"]),
        source_root=str(cfg["source"]),
        dest_root=str(cfg["dest"]),
        verify=bool(cfg.get("verify", False)),
        error_policy=str(cfg.get("error_policy", "SKIP")),
        retries=int(cfg.get("retries", 2)),
    )

    # ---------------------------
    # Run on the worker, render here
    # ---------------------------

    events: queue.Queue = queue.Queue()
    skip_reasons = Counter()

    def scan_skip(reason, path):
        skip_reasons[reason] += 1

    runner = RunService(logger)
    future = runner.submit(
        request,
        progress_cb=events.put,
        skip_cb=scan_skip,
    )

    copy_pbar = None
    _last_done = 0

    def handle(snap):
        nonlocal copy_pbar, _last_done
        if copy_pbar is None:
            copy_pbar = tqdm(
                total=snap.total,
                desc="Copy",
                unit="file",
                dynamic_ncols=True,
                disable=not bars_on,
            )
        delta = snap.copied - _last_done
        if delta > 0:
            copy_pbar.update(delta)
            _last_done = snap.copied

    while not (future.done() and events.empty()):
        try:
            snap = events.get(timeout=0.1)
        except queue.Empty:
            continue
        handle(snap)

    if copy_pbar is not None:
        copy_pbar.close()

    result = future.result()

    if skip_reasons:
        logger.log("Skipped entries:")
        for reason, cnt in skip_reasons.most_common(10):
            logger.log(f"  - {reason}: {cnt}")

    if cfg.get("summary_dir"):
        paths = runner.report.produce(result, str(cfg["summary_dir"]), request)
        logger.log(f"Summary written to {paths['summary']}")

    return exit_code(result.status)


if __name__ == "__main__":
    sys.exit(main())
