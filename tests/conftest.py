"""Shared pytest fixtures."""

import os
from pathlib import Path
from typing import Callable, Iterator

import pytest

from dupscan.config.settings import reset_settings
from dupscan.detector.checksum_pass import ChecksumPass


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from DUPSCAN_* variables and the cached settings."""
    for key in list(os.environ):
        if key.startswith("DUPSCAN_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Create files under tmp_path from a {relative path: content} mapping."""

    def _make(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode())
        return tmp_path

    return _make


@pytest.fixture
def scenario_a(make_tree: Callable[[dict[str, str]], Path]) -> Path:
    """a.txt and b.txt share content, c.txt has a unique size."""
    return make_tree({"a.txt": "hello", "b.txt": "hello", "c.txt": "world!"})


@pytest.fixture
def hashed_paths(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Record every path the checksum pass opens for hashing."""
    calls: list[str] = []
    original = ChecksumPass.hash_file

    def spy(self: ChecksumPass, path: str) -> str:
        calls.append(path)
        return original(self, path)

    monkeypatch.setattr(ChecksumPass, "hash_file", spy)
    return calls
