"""Data models for files, duplicate groups and scan runs."""

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from threading import Lock


class ScanState(str, Enum):
    """Pipeline state; moves forward only, or to FAILED."""

    IDLE = "idle"
    WALKING = "walking"
    SELECTING = "selecting"
    HASHING = "hashing"
    VERIFYING = "verifying"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class FileRecord:
    """A regular file found by the walker."""

    path: str
    size: int


@dataclass
class RunStats:
    """Counters accumulated while walking."""

    files_scanned: int = 0
    total_bytes: int = 0
    started_at: datetime = field(default_factory=datetime.now)
    _clock_start: float = field(default_factory=time.monotonic, repr=False)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def record(self, size: int) -> None:
        """Count one accepted file of the given size."""
        with self._lock:
            self.files_scanned += 1
            self.total_bytes += size

    @property
    def elapsed(self) -> float:
        """Seconds since the run started."""
        return time.monotonic() - self._clock_start


@dataclass
class DuplicateGroup:
    """A group of files with identical content."""

    group_id: int
    digest: str
    size: int
    paths: list[str]

    @property
    def count(self) -> int:
        """Number of duplicate files in this group."""
        return len(self.paths)

    @property
    def wasted_size(self) -> int:
        """Wasted space (size of all duplicates except one)."""
        return self.size * (len(self.paths) - 1)


@dataclass
class ScanReport:
    """Result of a successful scan."""

    root: str
    groups: list[DuplicateGroup]
    stats: RunStats
    elapsed: float
    hashed_files: int = 0

    @property
    def has_duplicates(self) -> bool:
        return bool(self.groups)

    @property
    def duplicate_files(self) -> int:
        """Number of files that belong to some duplicate group."""
        return sum(g.count for g in self.groups)

    @property
    def wasted_size(self) -> int:
        """Bytes that could be reclaimed by keeping one copy per group."""
        return sum(g.wasted_size for g in self.groups)

    @property
    def total_bytes_mb_kb(self) -> tuple[int, int]:
        """Scanned bytes as whole megabytes and remaining kilobytes."""
        total_kb = self.stats.total_bytes // 1024
        return total_kb // 1024, total_kb % 1024

    def group_sets(self) -> list[frozenset[str]]:
        """Group memberships, independent of path and group order."""
        return sorted((frozenset(g.paths) for g in self.groups), key=sorted)
