import shutil

from copier_io.path_utils import nearest_existing

def free_bytes(path: str) -> int:
    usage = shutil.disk_usage(nearest_existing(path))
    return int(usage.free)
