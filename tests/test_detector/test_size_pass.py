"""Tests for the size prefilter."""

from dupscan.detector.size_pass import SizePass
from dupscan.scanner.bucket_index import BucketIndex


def test_find_candidates_drops_unique_sizes() -> None:
    """Only sizes shared by two or more files survive."""
    index: BucketIndex[int] = BucketIndex()
    index.add(5, "a.txt")
    index.add(5, "b.txt")
    index.add(6, "c.txt")
    index.add(9, "d.txt")
    index.add(9, "e.txt")
    index.add(9, "f.txt")

    candidates = SizePass().find_candidates(index)

    assert candidates == {5: ["a.txt", "b.txt"], 9: ["d.txt", "e.txt", "f.txt"]}
    assert sorted(SizePass.candidate_paths(candidates)) == [
        "a.txt",
        "b.txt",
        "d.txt",
        "e.txt",
        "f.txt",
    ]


def test_find_candidates_empty_index() -> None:
    """An empty or all-unique index has no candidates."""
    index: BucketIndex[int] = BucketIndex()
    assert SizePass().find_candidates(index) == {}

    index.add(1, "x")
    assert SizePass().find_candidates(index) == {}
