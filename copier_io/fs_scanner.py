import os

from copier_io.attrs import is_hidden, is_link, is_regular
from copier_io.path_utils import norm_abs_path
from domain.constants import (
    SKIP_HIDDEN,
    SKIP_NOT_REGULAR,
    SKIP_STAT_ERROR,
    SKIP_SYMLINK,
    SKIP_WALK_ERROR,
)


def iter_files(source_root: str, skip_cb=None):
    """Yield (abs_path, stat_result) for every visible regular file under source_root.

    Links are never followed: linked directories are pruned, linked files skipped.
    Hidden directories are pruned together with their subtrees.
    skip_cb(reason, path) receives everything that was left out.
    """

    def _skip(reason: str, path: str):
        if skip_cb:
            skip_cb(reason, path)

    def _walk_error(err: OSError):
        _skip(SKIP_WALK_ERROR, err.filename or source_root)

    for dirpath, dirnames, filenames in os.walk(source_root, onerror=_walk_error, followlinks=False):
        # prune hidden/link directories
        pruned = []
        for d in dirnames:
            full = os.path.join(dirpath, d)
            try:
                st = os.lstat(full)
            except OSError:
                _skip(SKIP_STAT_ERROR, full)
                pruned.append(d)
                continue
            if is_hidden(full, st):
                _skip(SKIP_HIDDEN, full)
                pruned.append(d)
            elif is_link(st):
                _skip(SKIP_SYMLINK, full)
                pruned.append(d)
        for d in pruned:
            dirnames.remove(d)
        dirnames.sort()

        for fn in sorted(filenames):
            full = os.path.join(dirpath, fn)
            try:
                st = os.lstat(full)
            except OSError:
                _skip(SKIP_STAT_ERROR, full)
                continue
            if is_hidden(full, st):
                _skip(SKIP_HIDDEN, full)
                continue
            if is_link(st):
                _skip(SKIP_SYMLINK, full)
                continue
            if not is_regular(st):
                _skip(SKIP_NOT_REGULAR, full)
                continue
            yield norm_abs_path(full), st
