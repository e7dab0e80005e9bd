"""Concurrent-safe multimap from a key to the paths seen under it."""

from threading import Lock
from typing import Generic, Hashable, Iterator, TypeVar

from ..common.constants import INDEX_SHARDS

K = TypeVar("K", bound=Hashable)


class _Shard(Generic[K]):
    __slots__ = ("lock", "buckets")

    def __init__(self) -> None:
        self.lock = Lock()
        self.buckets: dict[K, list[str]] = {}


class BucketIndex(Generic[K]):
    """Key-sharded bucket index.

    Each key lives in exactly one shard, and each shard has its own lock, so
    writers to different shards never contend while writers to the same key
    are serialized. Bucket lists never leave the index; readers get copies.
    """

    def __init__(self, name: str = "index", shards: int = INDEX_SHARDS) -> None:
        """Initialize an empty index.

        Args:
            name: Label used in log messages
            shards: Number of independently locked shards
        """
        if shards < 1:
            raise ValueError("shards must be at least 1")
        self.name = name
        self._shards: list[_Shard[K]] = [_Shard() for _ in range(shards)]

    def _shard(self, key: K) -> _Shard[K]:
        return self._shards[hash(key) % len(self._shards)]

    def add(self, key: K, path: str) -> None:
        """Append a path to the bucket for key, creating the bucket if needed.

        Args:
            key: Bucket key (size or digest)
            path: File path to append
        """
        shard = self._shard(key)
        with shard.lock:
            shard.buckets.setdefault(key, []).append(path)

    def get(self, key: K) -> tuple[str, ...]:
        """Get a copy of the paths stored under key."""
        shard = self._shard(key)
        with shard.lock:
            return tuple(shard.buckets.get(key, ()))

    def __contains__(self, key: object) -> bool:
        shard = self._shards[hash(key) % len(self._shards)]
        with shard.lock:
            return key in shard.buckets

    def __len__(self) -> int:
        """Number of buckets."""
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.buckets)
        return total

    def total_paths(self) -> int:
        """Number of paths across all buckets."""
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += sum(len(paths) for paths in shard.buckets.values())
        return total

    def groups(self, min_members: int = 2) -> Iterator[tuple[K, tuple[str, ...]]]:
        """Iterate over buckets holding at least min_members paths.

        Order follows the shard layout and carries no meaning.

        Args:
            min_members: Minimum bucket size to yield

        Yields:
            (key, paths) pairs, paths copied out of the index
        """
        for shard in self._shards:
            with shard.lock:
                snapshot = [
                    (key, tuple(paths))
                    for key, paths in shard.buckets.items()
                    if len(paths) >= min_members
                ]
            yield from snapshot
