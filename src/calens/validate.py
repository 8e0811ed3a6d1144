"""Validation routines for a changelog directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .entries import entry_paths, read_entry
from .errors import CalensError
from .filesystem import FileSystem, LocalFileSystem
from .links import Tracker
from .releases import discover_releases


@dataclass
class ValidationIssue:
    """A file or folder that failed to parse."""

    path: Path
    message: str


def _issue_from_error(error: CalensError, fallback: Path) -> ValidationIssue:
    path = Path(error.path) if error.path is not None else fallback
    return ValidationIssue(path, error.message)


def run_validation(
    root: Path,
    *,
    filesystem: Optional[FileSystem] = None,
    tracker: Optional[Tracker] = None,
) -> list[ValidationIssue]:
    """Parse every release and entry below ``root``, returning one issue per failing file.

    A malformed release folder name or an unreadable directory stops the
    walk, since the remaining layout cannot be trusted.
    """
    filesystem = filesystem or LocalFileSystem()
    try:
        releases = discover_releases(root, filesystem=filesystem)
    except CalensError as exc:
        return [_issue_from_error(exc, root)]

    issues: list[ValidationIssue] = []
    for release in releases:
        try:
            paths = entry_paths(release.path, filesystem=filesystem)
        except CalensError as exc:
            issues.append(_issue_from_error(exc, release.path))
            continue
        for path in paths:
            try:
                read_entry(path, filesystem=filesystem, tracker=tracker)
            except CalensError as exc:
                issues.append(_issue_from_error(exc, path))
    return issues
