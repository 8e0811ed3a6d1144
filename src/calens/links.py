"""Reference URL parsing and classification into issues and pull requests."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import SplitResult, urlsplit

DEFAULT_TRACKER_HOST = "github.com"
DEFAULT_TRACKER_OWNER = "restic"
ANY_OWNER = "*"

_REFERENCE_PATH = re.compile(
    r"^/(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?P<kind>issues|pull)/(?P<id>.+)$"
)


@dataclass(frozen=True)
class Tracker:
    """Issue tracker whose URLs count as issue or pull request references.

    Only repositories of ``owner`` on ``host`` match. An owner of ``"*"``
    accepts repositories of any owner.
    """

    host: str = DEFAULT_TRACKER_HOST
    owner: str = DEFAULT_TRACKER_OWNER

    @property
    def any_owner(self) -> bool:
        return self.owner == ANY_OWNER


@dataclass(frozen=True)
class References:
    """Partition of an entry's URLs into issues, pull requests, and other links."""

    issues: tuple[str, ...] = ()
    issue_urls: tuple[str, ...] = ()
    prs: tuple[str, ...] = ()
    pr_urls: tuple[str, ...] = ()
    other_urls: tuple[str, ...] = ()
    primary_id: Optional[str] = None
    primary_url: Optional[str] = None


def parse_url(token: str) -> SplitResult:
    """Parse an absolute URL, raising ``ValueError`` for anything else."""
    parts = urlsplit(token)
    if not parts.scheme or not parts.netloc:
        raise ValueError("not an absolute URL")
    # Raises ValueError for a malformed port.
    _ = parts.port
    return parts


def classify_url(url: str, tracker: Tracker) -> tuple[Optional[str], Optional[str]]:
    """Return ``(kind, identifier)`` for a tracker reference, else ``(None, None)``.

    ``kind`` is ``"issues"`` or ``"pull"``.
    """
    parts = urlsplit(url)
    if (parts.hostname or "").lower() != tracker.host.lower():
        return None, None
    match = _REFERENCE_PATH.match(parts.path)
    if match is None:
        return None, None
    if not tracker.any_owner and match.group("owner") != tracker.owner:
        return None, None
    return match.group("kind"), match.group("id")


def classify_urls(urls: Iterable[str], tracker: Tracker | None = None) -> References:
    """Sort URLs into issue, pull request, and other references.

    The first URL that is an issue or pull request reference, in the order
    given, becomes the primary reference.
    """
    tracker = tracker or Tracker()
    collected = _Collector()
    for url in urls:
        kind, identifier = classify_url(url, tracker)
        if kind is None or identifier is None:
            collected.other_urls.append(url)
            continue
        if kind == "issues":
            collected.issues.append(identifier)
            collected.issue_urls.append(url)
        else:
            collected.prs.append(identifier)
            collected.pr_urls.append(url)
        if collected.primary_id is None:
            collected.primary_id = identifier
            collected.primary_url = url
    return collected.freeze()


@dataclass
class _Collector:
    issues: list[str] = field(default_factory=list)
    issue_urls: list[str] = field(default_factory=list)
    prs: list[str] = field(default_factory=list)
    pr_urls: list[str] = field(default_factory=list)
    other_urls: list[str] = field(default_factory=list)
    primary_id: Optional[str] = None
    primary_url: Optional[str] = None

    def freeze(self) -> References:
        return References(
            issues=tuple(self.issues),
            issue_urls=tuple(self.issue_urls),
            prs=tuple(self.prs),
            pr_urls=tuple(self.pr_urls),
            other_urls=tuple(self.other_urls),
            primary_id=self.primary_id,
            primary_url=self.primary_url,
        )
