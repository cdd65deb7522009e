import os
from contextlib import contextmanager
from dataclasses import dataclass

from domain.errors import AccessError
from utils.timeutil import now_iso


@dataclass
class AccessGrant:
    """Read access to the source tree and write access to the destination,
    held for the duration of one run."""
    source_root: str
    dest_root: str
    acquired_at: str
    released: bool = False

    def release(self) -> None:
        self.released = True


def check_source(source_root: str) -> None:
    if not os.path.exists(source_root):
        raise AccessError(f"Source folder does not exist: {source_root}")
    if not os.path.isdir(source_root):
        raise AccessError(f"Source path is not a folder: {source_root}")
    if not os.access(source_root, os.R_OK | os.X_OK):
        raise AccessError(f"No permission to read source folder: {source_root}")


def check_dest(dest_root: str) -> None:
    """A missing destination is fine here, it gets created before copying."""
    if not os.path.lexists(dest_root):
        return
    if not os.path.isdir(dest_root):
        raise AccessError(f"Destination path is not a folder: {dest_root}")
    if not os.access(dest_root, os.W_OK | os.X_OK):
        raise AccessError(f"No permission to write destination folder: {dest_root}")


@contextmanager
def access_scope(source_root: str, dest_root: str, logger=None):
    check_source(source_root)
    check_dest(dest_root)

    grant = AccessGrant(source_root, dest_root, acquired_at=now_iso())
    if logger:
        logger.log(f"Access acquired: {source_root} -> {dest_root}")
    try:
        yield grant
    finally:
        grant.release()
        if logger:
            logger.log("Access released")
