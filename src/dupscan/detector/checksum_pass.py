"""Pass 2: Group candidate files by content digest."""

import hashlib
from concurrent.futures import Future, ThreadPoolExecutor
from threading import BoundedSemaphore
from typing import Iterable

from ..common.constants import CHUNK_SIZE, DEFAULT_HASH_ALGORITHM, DEFAULT_MAX_WORKERS
from ..common.exceptions import ConfigError, ContentReadError
from ..common.latch import FirstErrorLatch
from ..common.logging import get_logger
from ..scanner.bucket_index import BucketIndex
from .size_pass import SizePass

logger = get_logger(__name__)


class ChecksumPass:
    """Second pass: hash candidates with a bounded worker pool."""

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        """Initialize checksum pass.

        Args:
            max_workers: Maximum files open / hashes in flight at once
            algorithm: hashlib algorithm name
            chunk_size: Bytes read per call
        """
        if max_workers < 1:
            raise ConfigError("max_workers must be at least 1")
        try:
            probe = hashlib.new(algorithm)
        except ValueError as e:
            raise ConfigError(f"Unsupported hash algorithm: {algorithm}") from e
        # shake_* report a zero digest size and need an explicit length
        if probe.digest_size == 0:
            raise ConfigError(f"Variable-length digest not supported: {algorithm}")

        self.max_workers = max_workers
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def hash_file(self, path: str) -> str:
        """Stream a file through the digest function.

        Args:
            path: File to hash

        Returns:
            Hex-encoded digest

        Raises:
            ContentReadError: If the file cannot be opened or read
        """
        digest = hashlib.new(self.algorithm)
        try:
            with open(path, "rb") as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b""):
                    digest.update(chunk)
        except OSError as e:
            raise ContentReadError(path, e) from e
        return digest.hexdigest()

    def _hash_into(self, path: str, hash_index: BucketIndex[str]) -> None:
        digest = self.hash_file(path)
        hash_index.add(digest, path)
        logger.debug(f"{digest} {path}")

    def hash_paths(self, paths: Iterable[str]) -> BucketIndex[str]:
        """Hash every path into a new hash index.

        At most max_workers tasks are submitted but unfinished at any time.
        The first failure stops all further submissions, cancels queued
        tasks and is re-raised once in-flight tasks finish.

        Args:
            paths: Files to hash

        Returns:
            Hash index mapping hex digest to paths

        Raises:
            ContentReadError: First read failure of any task
        """
        hash_index: BucketIndex[str] = BucketIndex(name="hash")
        latch = FirstErrorLatch()
        slots = BoundedSemaphore(self.max_workers)

        def on_done(future: Future) -> None:
            if not future.cancelled():
                error = future.exception()
                if error is not None and latch.set(error):
                    logger.debug(f"Hash task failed, cancelling pool: {error}")
            slots.release()

        submitted = 0
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="dupscan-hash"
        ) as executor:
            for path in paths:
                slots.acquire()
                if latch.is_set():
                    slots.release()
                    break
                future = executor.submit(self._hash_into, path, hash_index)
                future.add_done_callback(on_done)
                submitted += 1

            if latch.is_set():
                executor.shutdown(wait=True, cancel_futures=True)

        latch.raise_if_set()
        logger.debug(
            f"Hashed {submitted} files into {len(hash_index)} {hash_index.name} buckets"
        )
        return hash_index

    def find_duplicates(self, size_groups: dict[int, list[str]]) -> BucketIndex[str]:
        """Hash all members of multi-member size groups.

        Args:
            size_groups: Groups of files with same size

        Returns:
            Hash index over every candidate path
        """
        paths = SizePass.candidate_paths(size_groups)
        logger.info(
            f"Pass 2: Hashing {len(paths)} candidates with {self.algorithm} "
            f"({self.max_workers} workers)"
        )

        if not paths:
            logger.info("No candidates to check")
            return BucketIndex(name="hash")

        hash_index = self.hash_paths(paths)

        groups = sum(1 for _ in hash_index.groups())
        logger.info(f"Found {groups} groups of identical content")
        return hash_index
