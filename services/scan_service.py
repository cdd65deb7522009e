# services/scan_service.py

import os

from copier_io.access import check_source
from copier_io.fs_scanner import iter_files
from domain.constants import SKIP_EXTENSION, SKIP_STAT_ERROR, SKIP_WALK_ERROR
from domain.models import FileMatch
from domain.rules import file_extension, matches_extension, normalize_extension

# Reasons worth a log line; the rest only go to skip_cb
_LOGGED_SKIPS = {SKIP_STAT_ERROR, SKIP_WALK_ERROR}


class ScanService:
    def __init__(self, logger=None):
        self.logger = logger

    def find(
        self,
        source_root: str,
        extension: str,
        progress_cb=None,
        skip_cb=None,          # skip_cb(reason, path)
        progress_every: int = 200,
    ) -> list[FileMatch]:
        """Find every file under source_root whose extension matches.

        Notes:
        - Raises AccessError when source_root is missing or unreadable.
        - Hidden entries are skipped; hidden directories take their subtree with them.
        - Links are never followed.
        - Per-entry errors are logged and skipped, they never abort the walk.
        - progress_cb(count, path) called every ~progress_every matches and once at the end.
        - The list is complete before it is returned. Callers must not rely on its order.
        """
        check_source(source_root)
        wanted = normalize_extension(extension)

        def _skip(reason: str, path: str):
            if reason in _LOGGED_SKIPS and self.logger:
                self.logger.log(f"[SCAN] skipped {path} ({reason})")
            if skip_cb:
                skip_cb(reason, path)

        matches: list[FileMatch] = []
        for path, st in iter_files(source_root, skip_cb=_skip):
            name = os.path.basename(path)
            if not matches_extension(name, wanted):
                _skip(SKIP_EXTENSION, path)
                continue
            ext = file_extension(name)

            matches.append(FileMatch(path=path, name=name, ext=ext, size=int(st.st_size)))
            if progress_cb and (len(matches) % progress_every == 0):
                progress_cb(len(matches), path)

        if progress_cb:
            progress_cb(len(matches), "")
        if self.logger:
            self.logger.log(f"Found {len(matches)} .{wanted} files under {source_root}")
        return matches
