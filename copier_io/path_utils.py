import os

def norm_abs_path(p: str) -> str:
    return os.path.abspath(os.path.normpath(p))

def ensure_parent(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)

def is_within(path: str, root: str) -> bool:
    path, root = norm_abs_path(path), norm_abs_path(root)
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # different drives
        return False

def nearest_existing(path: str) -> str:
    p = norm_abs_path(path)
    while not os.path.exists(p):
        parent = os.path.dirname(p)
        if parent == p:
            break
        p = parent
    return p
