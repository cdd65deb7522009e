from dataclasses import dataclass
from typing import Optional

from domain.constants import RUN_STATUS_FATAL


@dataclass(frozen=True)
class FileMatch:
    path: str   # absolute
    name: str
    ext: str    # lowercase, no dot
    size: int


@dataclass(frozen=True)
class CopyPlan:
    match: FileMatch
    dest_path: str
    collision_suffix: int = 0  # 0 means the plain name was free


@dataclass(frozen=True)
class ErrorInfo:
    kind: str
    message: str


@dataclass(frozen=True)
class CopyOutcome:
    total: int = 0
    successes: int = 0
    failures: int = 0
    last_error: Optional[ErrorInfo] = None
    bytes_copied: int = 0
    renamed: int = 0  # copies that needed a collision suffix

    @property
    def completed(self) -> bool:
        return self.successes + self.failures == self.total


@dataclass(frozen=True)
class ProgressSnapshot:
    copied: int
    total: int
    source_path: str = ""
    dest_path: str = ""


@dataclass(frozen=True)
class CopyRequest:
    extension: str
    source_root: str
    dest_root: str

    # Copy options (CLI/config only; the GUI uses the defaults)
    verify: bool = False
    error_policy: str = "SKIP"
    retries: int = 2


@dataclass(frozen=True)
class RunResult:
    status: str
    outcome: CopyOutcome
    message: str
    fatal_error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.status != RUN_STATUS_FATAL
