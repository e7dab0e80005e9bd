"""Pass 1: Group files by size."""

from ..common.logging import get_logger
from ..scanner.bucket_index import BucketIndex

logger = get_logger(__name__)


class SizePass:
    """First pass: keep only files that share their size with another file."""

    def find_candidates(self, size_index: BucketIndex[int]) -> dict[int, list[str]]:
        """Find files with duplicate sizes.

        Files whose size is unique cannot have a duplicate and are dropped
        here without ever being opened.

        Args:
            size_index: Size index filled by the walker

        Returns:
            Dictionary mapping size to list of paths
        """
        logger.info("Pass 1: Grouping files by size")
        candidates = {size: list(paths) for size, paths in size_index.groups(min_members=2)}

        if not candidates:
            logger.info("No files share a size")
            return candidates

        total_files = sum(len(paths) for paths in candidates.values())
        logger.info(
            f"Found {total_files} files in {len(candidates)} size groups "
            f"(avg {total_files / len(candidates):.1f} files/group)"
        )

        return candidates

    @staticmethod
    def candidate_paths(candidates: dict[int, list[str]]) -> list[str]:
        """Flatten size groups into the list of paths to hash."""
        return [path for paths in candidates.values() for path in paths]
