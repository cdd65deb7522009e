import os

import pytest

from domain.models import FileMatch
from domain.rules import file_extension


@pytest.fixture
def make_tree():
    """make_tree(root, {"sub/a.jpg": b"...", ...}) writes the files and returns root."""

    def _make(root, files: dict):
        for rel, content in files.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                content = content.encode("utf-8")
            p.write_bytes(content)
        return root

    return _make


def match_for(path) -> FileMatch:
    path = os.path.abspath(str(path))
    name = os.path.basename(path)
    return FileMatch(path=path, name=name, ext=file_extension(name), size=os.path.getsize(path))


@pytest.fixture
def matches_for():
    def _matches(*paths):
        return [match_for(p) for p in paths]

    return _matches


class ListLogger:
    """RunLogger stand-in that keeps lines in memory."""

    def __init__(self):
        self.lines = []

    def log(self, msg: str):
        self.lines.append(msg)


@pytest.fixture
def logger():
    return ListLogger()
