"""Tests for whole-tree validation."""

from __future__ import annotations

from pathlib import Path

from calens.filesystem import MemoryFileSystem
from calens.validate import run_validation


def test_run_validation_reports_each_broken_entry() -> None:
    filesystem = MemoryFileSystem(
        {
            "changelog/unreleased/good": "Bugfix: fine\n",
            "changelog/unreleased/no-type": "missing type\n",
            "changelog/1.0.0_2023-01-01/dot": "Change: ends with a dot.\n",
        }
    )

    issues = run_validation(Path("changelog"), filesystem=filesystem)

    assert [(issue.path, issue.message.split(" ")[0:3]) for issue in issues] == [
        (Path("changelog/unreleased/no-type"), ["entry", "title", "does"]),
        (Path("changelog/1.0.0_2023-01-01/dot"), ["entry", "title", "must"]),
    ]


def test_run_validation_clean_tree() -> None:
    filesystem = MemoryFileSystem({"changelog/unreleased/good": "Bugfix: fine\n"})

    assert run_validation(Path("changelog"), filesystem=filesystem) == []


def test_run_validation_stops_at_malformed_release_folder() -> None:
    filesystem = MemoryFileSystem(
        {
            "changelog/release-one/entry": "Bugfix: fine\n",
            "changelog/unreleased/broken": "broken\n",
        }
    )

    issues = run_validation(Path("changelog"), filesystem=filesystem)

    assert len(issues) == 1
    assert issues[0].path == Path("changelog/release-one")
    assert "does not match" in issues[0].message


def test_run_validation_missing_root() -> None:
    issues = run_validation(Path("changelog"), filesystem=MemoryFileSystem())

    assert issues[0].path == Path("changelog")
    assert "unable to list input directory" in issues[0].message
