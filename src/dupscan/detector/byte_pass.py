"""Pass 3: Optional byte-by-byte comparison."""

from typing import BinaryIO

from ..common.constants import CHUNK_SIZE
from ..common.exceptions import ContentReadError
from ..common.logging import get_logger

logger = get_logger(__name__)


class BytePass:
    """Third pass (optional): confirm digest matches byte by byte."""

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        """Initialize byte pass.

        Args:
            chunk_size: Bytes compared per read
        """
        self.chunk_size = chunk_size

    @staticmethod
    def _open(path: str) -> BinaryIO:
        try:
            return open(path, "rb")
        except OSError as e:
            raise ContentReadError(path, e) from e

    def _read(self, f: BinaryIO, path: str) -> bytes:
        try:
            return f.read(self.chunk_size)
        except OSError as e:
            raise ContentReadError(path, e) from e

    def same_content(self, first: str, second: str) -> bool:
        """Compare two files chunk by chunk.

        Raises:
            ContentReadError: If either file cannot be read
        """
        with self._open(first) as a, self._open(second) as b:
            while True:
                chunk_a = self._read(a, first)
                chunk_b = self._read(b, second)
                if chunk_a != chunk_b:
                    return False
                if not chunk_a:
                    return True

    def split_group(self, paths: list[str]) -> list[list[str]]:
        """Partition paths into classes of byte-identical files.

        Each path is compared against the first member of every class found
        so far and joins the first class it matches.
        """
        classes: list[list[str]] = []
        for path in paths:
            for members in classes:
                if self.same_content(members[0], path):
                    members.append(path)
                    break
            else:
                classes.append([path])
        return classes

    def verify_duplicates(
        self, digest_groups: dict[str, list[str]]
    ) -> dict[str, list[list[str]]]:
        """Verify duplicates with byte comparison.

        Args:
            digest_groups: Groups of files with the same digest

        Returns:
            Digest mapped to the verified sub-groups (two or more paths each)
        """
        logger.info(f"Pass 3: Byte-by-byte comparison of {len(digest_groups)} groups")

        verified: dict[str, list[list[str]]] = {}
        for digest, paths in digest_groups.items():
            classes = self.split_group(paths)
            if len(classes) > 1:
                logger.warning(
                    f"Digest collision on {digest}: {len(paths)} files split into "
                    f"{len(classes)} distinct contents"
                )
            kept = [members for members in classes if len(members) > 1]
            if kept:
                verified[digest] = kept

        return verified
