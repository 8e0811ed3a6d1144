"""Discovery and ordering of release directories."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from packaging.version import InvalidVersion, Version

from .errors import ConfigError, ReleaseNameError
from .filesystem import FileSystem, LocalFileSystem
from .utils import log_debug
from .versions import UNRELEASED, parse_release_name

UNRELEASED_LABEL = "UNRELEASED"


@dataclass(frozen=True)
class Release:
    """A release directory with its parsed version and date."""

    path: Path
    version: str
    date: Optional[datetime.date] = None

    @property
    def is_unreleased(self) -> bool:
        return self.version == UNRELEASED

    @property
    def date_label(self) -> str:
        """Return the ISO date, or ``UNRELEASED`` for undated releases."""
        if self.date is None:
            return UNRELEASED_LABEL
        return self.date.isoformat()


def release_from_path(path: Path) -> Release:
    """Build a release from a directory path by parsing its name."""
    try:
        version, release_date = parse_release_name(path.name)
    except ReleaseNameError as exc:
        raise ReleaseNameError(exc.message, path=path) from exc
    return Release(path=path, version=version, date=release_date)


def release_sort_key(release: Release) -> tuple[int, int, int, str]:
    """Return a key that orders undated releases first, then newest dates first.

    ``unreleased`` leads the undated releases; ties fall back to the folder name.
    """
    if release.date is None:
        return (0, 0, 0 if release.is_unreleased else 1, release.path.name)
    return (1, -release.date.toordinal(), 0, release.path.name)


def sort_releases(releases: Iterable[Release]) -> list[Release]:
    """Order releases from the most recent to the oldest."""
    return sorted(releases, key=release_sort_key)


def discover_releases(
    root: Path,
    *,
    filesystem: Optional[FileSystem] = None,
) -> list[Release]:
    """Return the releases found as subdirectories of ``root``, newest first."""
    filesystem = filesystem or LocalFileSystem()
    try:
        items = filesystem.list_directory(root)
    except OSError as exc:
        raise ConfigError(f"unable to list input directory: {exc}", path=root) from exc

    releases = [release_from_path(root / item.name) for item in items if item.is_dir]
    ordered = sort_releases(releases)
    for release in ordered:
        log_debug(f"found release {release.version} ({release.date_label}) at {release.path}")
    return ordered


def _normalize_version(value: str) -> Version | str:
    candidate = value.strip()
    try:
        return Version(candidate)
    except InvalidVersion:
        return candidate


def version_matches(release: Release, requested: str) -> bool:
    """Return whether ``requested`` names the release's version.

    Versions are compared as PEP 440 versions when both sides parse, so a
    leading ``v`` or an alternative pre-release spelling still matches.
    """
    if requested.strip().lower() == UNRELEASED:
        return release.is_unreleased
    if release.is_unreleased:
        return False
    wanted = _normalize_version(requested)
    actual = _normalize_version(release.version)
    if isinstance(wanted, Version) and isinstance(actual, Version):
        return wanted == actual
    return requested.strip() == release.version


def _matching_releases(releases: Sequence[Release], requested: str) -> list[Release]:
    """Return the releases named by ``requested``.

    An exact folder version wins; PEP 440 equality is only tried when no
    release carries the requested string verbatim.
    """
    exact = [release for release in releases if release.version == requested.strip()]
    if exact:
        return exact
    return [release for release in releases if version_matches(release, requested)]


def select_releases(releases: Sequence[Release], versions: Sequence[str]) -> list[Release]:
    """Keep only the releases named in ``versions``, preserving release order.

    An empty ``versions`` selects every release. A requested version without a
    matching release is an error.
    """
    if not versions:
        return list(releases)
    selected: set[Release] = set()
    missing: list[str] = []
    for requested in versions:
        matches = _matching_releases(releases, requested)
        if not matches:
            missing.append(requested)
        selected.update(matches)
    if missing:
        available = ", ".join(release.version for release in releases) or "none"
        raise ConfigError(
            f"unknown release version(s): {', '.join(missing)}. Available: {available}"
        )
    return [release for release in releases if release in selected]
