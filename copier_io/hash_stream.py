from blake3 import blake3


def file_digest(path: str, chunk_bytes: int = 4 * 1024 * 1024) -> str:
    """BLAKE3 hex digest of a file, read in chunks."""
    h = blake3()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_bytes), b""):
            h.update(chunk)
    return h.hexdigest()
