"""Tests for the command line interface."""

import csv
import io
import json
from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from dupscan.cli.app import app
from dupscan.common.exceptions import ContentReadError
from dupscan.detector.checksum_pass import ChecksumPass

runner = CliRunner()


def test_scenario_a_text_report(scenario_a: Path) -> None:
    """Duplicates are listed with their digest, followed by the summary."""
    result = runner.invoke(app, [str(scenario_a)])

    assert result.exit_code == 0
    assert "Duplicate files found:" in result.output
    assert "Hash: " in result.output
    assert str(scenario_a / "a.txt") in result.output
    assert str(scenario_a / "b.txt") in result.output
    assert str(scenario_a / "c.txt") not in result.output
    assert "Files scanned: 3" in result.output
    assert "Duplicate groups: 1" in result.output
    assert "Total files size sum: 0 MB 0 KB" in result.output
    assert "Time taken:" in result.output


def test_scenario_b_all_unique(make_tree: Callable) -> None:
    """A single file reports that all files are unique."""
    root = make_tree({"only.txt": "alone"})

    result = runner.invoke(app, [str(root)])

    assert result.exit_code == 0
    assert "All files are unique" in result.output
    assert "Files scanned: 1" in result.output
    assert "Duplicate groups: 0" in result.output


def test_scenario_c_missing_root(tmp_path: Path) -> None:
    """A missing root exits 1 with an error and no report."""
    result = runner.invoke(app, [str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Failed to walk" in result.stderr


def test_content_read_error_exits_without_report(
    scenario_a: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A file that cannot be read while hashing aborts the run with no report."""

    def broken(self: ChecksumPass, path: str) -> str:
        raise ContentReadError(path, PermissionError(13, "Permission denied"))

    monkeypatch.setattr(ChecksumPass, "hash_file", broken)

    result = runner.invoke(app, [str(scenario_a)])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Failed to read" in result.stderr


def test_defaults_to_current_directory(
    scenario_a: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without ROOT the working directory is scanned."""
    monkeypatch.chdir(scenario_a)

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "a.txt" in result.output
    assert "Files scanned: 3" in result.output


def test_extra_positional_argument_is_usage_error(scenario_a: Path) -> None:
    """More than one positional argument exits 1 before scanning."""
    result = runner.invoke(app, [str(scenario_a), str(scenario_a)])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Unexpected extra arguments" in result.stderr
    assert "Usage: dupscan" in result.stderr


def test_json_format(scenario_a: Path) -> None:
    """JSON output carries groups and statistics."""
    result = runner.invoke(app, [str(scenario_a), "--format", "json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["all_unique"] is False
    assert data["files_scanned"] == 3
    assert data["files_hashed"] == 2
    assert data["total_groups"] == 1
    assert sorted(Path(p).name for p in data["groups"][0]["paths"]) == ["a.txt", "b.txt"]
    assert data["groups"][0]["size"] == 5


def test_csv_format(scenario_a: Path) -> None:
    """CSV output has one row per duplicate file."""
    result = runner.invoke(app, [str(scenario_a), "-f", "csv"])

    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.stdout)))
    assert rows[0] == ["group_id", "digest", "size", "path"]
    assert sorted(Path(row[3]).name for row in rows[1:]) == ["a.txt", "b.txt"]


def test_exclude_option(make_tree: Callable) -> None:
    """--exclude adds patterns to the default ignore set."""
    root = make_tree({"a.txt": "dup", "backup/a.txt": "dup", ".git/a.txt": "dup"})

    result = runner.invoke(app, [str(root), "-x", "back*"])

    assert result.exit_code == 0
    assert "All files are unique" in result.output
    assert "Files scanned: 1" in result.output


def test_no_default_excludes(make_tree: Callable) -> None:
    """--no-default-excludes scans denylisted directories too."""
    root = make_tree({"a.txt": "dup", ".git/a.txt": "dup"})

    result = runner.invoke(app, [str(root), "--no-default-excludes"])

    assert result.exit_code == 0
    assert "Duplicate groups: 1" in result.output


def test_invalid_algorithm_is_config_error(scenario_a: Path) -> None:
    """A bad --algorithm fails without scanning."""
    result = runner.invoke(app, [str(scenario_a), "--algorithm", "nope"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "Files scanned" not in result.output


def test_settings_from_environment(
    scenario_a: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """DUPSCAN_* variables configure the run."""
    monkeypatch.setenv("DUPSCAN_MIN_FILE_SIZE", "6")

    result = runner.invoke(app, [str(scenario_a), "--format", "json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["files_scanned"] == 1
    assert data["all_unique"] is True
