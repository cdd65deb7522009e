import contextlib
import os
import shutil

from copier_io.path_utils import ensure_parent
from domain.constants import COPY_CHUNK_BYTES


def copy_stream(src: str, dst: str, chunk_size: int = COPY_CHUNK_BYTES) -> int:
    """Copy src to dst byte for byte and return the number of bytes written.

    dst is created exclusively: if something already sits at dst the call
    raises FileExistsError and nothing is overwritten. When the write or the
    metadata copy fails, the dst this call created is removed.
    """
    ensure_parent(dst)
    copied = 0
    with open(src, "rb") as fsrc:
        fdst = open(dst, "xb")
        try:
            with fdst:
                while True:
                    buf = fsrc.read(chunk_size)
                    if not buf:
                        break
                    fdst.write(buf)
                    copied += len(buf)
            shutil.copystat(src, dst, follow_symlinks=False)
        except OSError:
            with contextlib.suppress(OSError):
                os.remove(dst)
            raise
    return copied
