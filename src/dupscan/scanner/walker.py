"""Local filesystem walker."""

import fnmatch
import os
import stat
from typing import Iterable, Iterator

from ..common.constants import DEFAULT_IGNORE_DIRS, MIN_FILE_SIZE
from ..common.exceptions import TraversalError
from ..common.logging import get_logger
from ..detector.models import FileRecord, RunStats
from .bucket_index import BucketIndex

logger = get_logger(__name__)


class Walker:
    """Walks a directory tree and inventories candidate files."""

    def __init__(
        self,
        ignore_patterns: Iterable[str] = DEFAULT_IGNORE_DIRS,
        min_size: int = MIN_FILE_SIZE,
    ) -> None:
        """Initialize walker.

        Args:
            ignore_patterns: fnmatch patterns for directory names to prune
            min_size: Minimum file size in bytes (zero-byte files are always skipped)
        """
        self.ignore_patterns = tuple(ignore_patterns)
        self.min_size = max(min_size, MIN_FILE_SIZE)

    def is_ignored(self, name: str) -> bool:
        """Check a directory name against the ignore patterns."""
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.ignore_patterns)

    def walk(self, root: str) -> Iterator[FileRecord]:
        """Walk the tree under root.

        Symbolic links are never followed or recorded, non-regular files and
        files below the minimum size are skipped, and ignored directories are
        pruned with everything beneath them.

        Args:
            root: Directory to scan (a regular file yields just itself)

        Yields:
            FileRecord instances

        Raises:
            TraversalError: On the first entry that cannot be listed or stated
        """
        try:
            root_stat = os.stat(root)
        except OSError as e:
            raise TraversalError(root, e) from e

        if stat.S_ISREG(root_stat.st_mode):
            if root_stat.st_size >= self.min_size:
                yield FileRecord(path=root, size=root_stat.st_size)
            return

        pending = [root]
        while pending:
            directory = pending.pop()
            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        if entry.is_symlink():
                            logger.debug(f"Skipping symlink: {entry.path}")
                            continue

                        if entry.is_dir(follow_symlinks=False):
                            if self.is_ignored(entry.name):
                                logger.debug(f"Pruning ignored directory: {entry.path}")
                            else:
                                pending.append(entry.path)
                            continue

                        if not entry.is_file(follow_symlinks=False):
                            continue

                        try:
                            size = entry.stat(follow_symlinks=False).st_size
                        except OSError as e:
                            raise TraversalError(entry.path, e) from e

                        if size < self.min_size:
                            continue

                        yield FileRecord(path=entry.path, size=size)
            except OSError as e:
                raise TraversalError(directory, e) from e

    def populate(self, root: str, size_index: BucketIndex[int], stats: RunStats) -> None:
        """Walk root, filling the size index and run counters.

        Args:
            root: Directory to scan
            size_index: Index receiving one entry per accepted file
            stats: Counters for scanned files and bytes
        """
        logger.info(f"Walking {root} (ignoring {len(self.ignore_patterns)} directory patterns)")

        for record in self.walk(root):
            stats.record(record.size)
            size_index.add(record.size, record.path)

        logger.info(
            f"Walk complete: {stats.files_scanned} files, {stats.total_bytes} bytes, "
            f"{len(size_index)} {size_index.name} buckets"
        )
