import os

from domain.constants import COLLISION_SEPARATOR, HIDDEN_PREFIX


def normalize_extension(ext: str) -> str:
    """Lowercase a user supplied extension and drop one leading dot.

    ".JPG", "jpg" and " Jpg " all normalize to "jpg".
    """
    e = (ext or "").strip()
    if e.startswith("."):
        e = e[1:]
    return e.lower()


def file_extension(filename: str) -> str:
    """Substring after the final dot, lowercased. "" when there is none."""
    _, dot_ext = os.path.splitext(filename)
    return dot_ext[1:].lower()


def is_hidden_name(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def matches_extension(filename: str, ext: str) -> bool:
    wanted = normalize_extension(ext)
    return bool(wanted) and file_extension(filename) == wanted


def collision_name(filename: str, n: int) -> str:
    """Name for the n-th collision retry: photo.JPG -> photo_2.JPG."""
    stem, dot_ext = os.path.splitext(filename)
    return f"{stem}{COLLISION_SEPARATOR}{n}{dot_ext}"


def resolve_collision(dest_folder: str, filename: str) -> tuple[str, int]:
    """Returns (new_filename, suffix_num). suffix_num 0 means no change.

    Collision policy: _1, _2... always derived from the original name.
    """

    candidate = filename
    n = 0
    while os.path.lexists(os.path.join(dest_folder, candidate)):
        n += 1
        candidate = collision_name(filename, n)

    return candidate, n
