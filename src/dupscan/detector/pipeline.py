"""Multi-pass duplicate detection pipeline."""

from typing import Optional

from ..common.logging import get_logger
from ..config.settings import Settings
from ..scanner.bucket_index import BucketIndex
from ..scanner.walker import Walker
from .byte_pass import BytePass
from .checksum_pass import ChecksumPass
from .models import DuplicateGroup, RunStats, ScanReport, ScanState
from .size_pass import SizePass

logger = get_logger(__name__)


class DetectionPipeline:
    """Orchestrates the walk and the multi-pass duplicate detection."""

    def __init__(
        self,
        walker: Optional[Walker] = None,
        checksum_pass: Optional[ChecksumPass] = None,
        byte_pass: Optional[BytePass] = None,
    ) -> None:
        """Initialize detection pipeline.

        Args:
            walker: Directory walker (defaults to the standard ignore set)
            checksum_pass: Hasher pool (defaults to 30 workers, SHA-256)
            byte_pass: Optional byte comparison; None trusts digest equality
        """
        self.walker = walker or Walker()
        self.size_pass = SizePass()
        self.checksum_pass = checksum_pass or ChecksumPass()
        self.byte_pass = byte_pass
        self.state = ScanState.IDLE

    @classmethod
    def from_settings(cls, settings: Settings) -> "DetectionPipeline":
        """Build a pipeline from application settings."""
        return cls(
            walker=Walker(settings.ignore_dirs, min_size=settings.min_file_size),
            checksum_pass=ChecksumPass(
                max_workers=settings.max_workers,
                algorithm=settings.hash_algorithm,
                chunk_size=settings.chunk_size,
            ),
            byte_pass=BytePass(settings.chunk_size) if settings.byte_compare else None,
        )

    def _enter(self, state: ScanState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state

    def run(self, root: str) -> ScanReport:
        """Scan root and report groups of identical files.

        Args:
            root: Directory to scan

        Returns:
            Complete scan report

        Raises:
            DupScanError: First fatal error of any stage; no report is built
            Exception: Any unexpected failure, after moving to FAILED
        """
        logger.info(f"Starting duplicate detection pipeline on {root}")
        stats = RunStats()

        try:
            # Walk and index by size
            self._enter(ScanState.WALKING)
            size_index: BucketIndex[int] = BucketIndex(name="size")
            self.walker.populate(root, size_index, stats)

            # Pass 1: Group by size
            self._enter(ScanState.SELECTING)
            size_groups = self.size_pass.find_candidates(size_index)

            # Pass 2: Group by digest
            self._enter(ScanState.HASHING)
            hash_index = self.checksum_pass.find_duplicates(size_groups)
            digest_groups = {digest: list(paths) for digest, paths in hash_index.groups()}

            # Pass 3: Optional byte comparison
            verified: dict[str, list[list[str]]]
            if self.byte_pass is not None and digest_groups:
                self._enter(ScanState.VERIFYING)
                verified = self.byte_pass.verify_duplicates(digest_groups)
            else:
                verified = {digest: [paths] for digest, paths in digest_groups.items()}

            self._enter(ScanState.REPORTING)
            sizes = {path: size for size, paths in size_groups.items() for path in paths}
            groups = self._build_groups(verified, sizes)
        except Exception as e:
            logger.info(f"Pipeline failed while {self.state.value}: {e}")
            self._enter(ScanState.FAILED)
            raise

        report = ScanReport(
            root=root,
            groups=groups,
            stats=stats,
            elapsed=stats.elapsed,
            hashed_files=hash_index.total_paths(),
        )
        self._enter(ScanState.DONE)
        logger.info(f"Detection complete: {len(groups)} duplicate groups found")
        return report

    @staticmethod
    def _build_groups(
        verified: dict[str, list[list[str]]], sizes: dict[str, int]
    ) -> list[DuplicateGroup]:
        """Convert verified digest groups into numbered DuplicateGroups."""
        groups = [
            DuplicateGroup(
                group_id=0,
                digest=digest,
                size=sizes[members[0]],
                paths=sorted(members),
            )
            for digest, classes in verified.items()
            for members in classes
        ]

        # Sort by wasted space (largest first)
        groups.sort(key=lambda g: (-g.wasted_size, g.digest, g.paths))
        for group_id, group in enumerate(groups, start=1):
            group.group_id = group_id

        return groups
