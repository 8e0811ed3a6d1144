"""Parsing of release folder names into a version and an optional date."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from .errors import ReleaseNameError

UNRELEASED = "unreleased"

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
RELEASE_NAME_PATTERN = re.compile(
    r"^(?P<version>\d+\.\d+\.\d+"
    rf"(?:-{_IDENTIFIERS})?"
    rf"(?:\+{_IDENTIFIERS})?)"
    r"(?:_(?P<date>\d{4}-\d{2}-\d{2}))?$"
)


def parse_release_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` calendar date."""
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ReleaseNameError(f"invalid release date '{value}': {exc}") from exc


def parse_release_name(name: str) -> tuple[str, Optional[date]]:
    """Split a release folder name into its version and release date.

    Accepted names are the literal ``unreleased`` or
    ``<major>.<minor>.<patch>[-<prerelease>][+<build>]`` followed by an
    optional ``_<YYYY-MM-DD>`` suffix.
    """
    if name == UNRELEASED:
        return UNRELEASED, None

    match = RELEASE_NAME_PATTERN.match(name)
    if match is None:
        raise ReleaseNameError(
            f"release folder name '{name}' does not match "
            "'<major>.<minor>.<patch>[-<prerelease>][+<build>][_<YYYY-MM-DD>]' or 'unreleased'"
        )

    raw_date = match.group("date")
    release_date = parse_release_date(raw_date) if raw_date else None
    return match.group("version"), release_date
