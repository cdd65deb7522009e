import os
from utils.timeutil import now_iso

class RunLogger:
    """Timestamped run log. Appends to `path` when given and hands every
    line to `echo` (tqdm.write in the CLI, a Qt signal in the GUI)."""

    def __init__(self, path: str | None = None, echo=None):
        self.path = path
        self.echo = echo
        if path:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    def log(self, msg: str):
        line = f"{now_iso()} {msg}"
        if self.path:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        if self.echo:
            self.echo(line)
