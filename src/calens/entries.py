"""Changelog entry parsing, validation, and per-release collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .errors import ConfigError, EntryError
from .filesystem import FileSystem, LocalFileSystem
from .links import References, Tracker, classify_urls, parse_url
from .text import CODE_FENCE, capitalize
from .utils import log_debug

TITLE_SEPARATOR = ": "
MAX_TITLE_LINE_WIDTH = 80
TITLE_TERMINATORS = (".", "!", "?")
BYTE_ORDER_MARK = "\ufeff"

# Files inside a release directory that are not entries.
TEMPLATE_MARKER = "TEMPLATE"
VERSIONS_MARKER = "versions"
RESERVED_NAMES = frozenset({TEMPLATE_MARKER, VERSIONS_MARKER})


class EntryType(str, Enum):
    """Kinds of change, declared in the order they appear in a release."""

    SECURITY = "Security"
    BUGFIX = "Bugfix"
    CHANGE = "Change"
    ENHANCEMENT = "Enhancement"

    def __str__(self) -> str:
        return self.value

    @property
    def priority(self) -> int:
        return _PRIORITIES[self]

    @property
    def short(self) -> str:
        return _ABBREVIATIONS[self]

    @classmethod
    def lookup(cls, label: str) -> EntryType:
        """Return the type named by ``label``, ignoring case."""
        normalized = label.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"entry type '{label}' is invalid, valid types: {allowed}")


_PRIORITIES = {entry_type: rank for rank, entry_type in enumerate(EntryType, start=1)}
_ABBREVIATIONS = {
    EntryType.SECURITY: "Sec",
    EntryType.BUGFIX: "Fix",
    EntryType.CHANGE: "Chg",
    EntryType.ENHANCEMENT: "Enh",
}


@dataclass(frozen=True)
class Entry:
    """A single change parsed from an entry file."""

    type: Optional[EntryType]
    title: str
    paragraphs: tuple[str, ...] = ()
    urls: tuple[str, ...] = ()
    references: References = field(default_factory=References)
    path: Optional[Path] = None

    @property
    def type_short(self) -> str:
        return self.type.short if self.type is not None else ""

    @property
    def text(self) -> str:
        return "\n\n".join(self.paragraphs)

    @property
    def issues(self) -> tuple[str, ...]:
        return self.references.issues

    @property
    def issue_urls(self) -> tuple[str, ...]:
        return self.references.issue_urls

    @property
    def prs(self) -> tuple[str, ...]:
        return self.references.prs

    @property
    def pr_urls(self) -> tuple[str, ...]:
        return self.references.pr_urls

    @property
    def other_urls(self) -> tuple[str, ...]:
        return self.references.other_urls

    @property
    def primary_id(self) -> Optional[str]:
        return self.references.primary_id

    @property
    def primary_url(self) -> Optional[str]:
        return self.references.primary_url


def entry_problems(entry: Entry) -> Iterator[str]:
    """Yield a message for every format rule the entry breaks."""
    if entry.type is None:
        yield "entry title does not have a type prefix, example: 'Bugfix: Restore old behavior'"
        type_width = 0
    else:
        type_width = len(entry.type.value)
    if not entry.title:
        yield "entry title is empty"
    elif entry.title.endswith(TITLE_TERMINATORS):
        yield f"entry title must not end with punctuation ({' '.join(TITLE_TERMINATORS)})"
    if type_width and type_width + 1 + len(entry.title) > MAX_TITLE_LINE_WIDTH:
        limit = MAX_TITLE_LINE_WIDTH - type_width - 1
        yield f"entry title is too long ({len(entry.title)} > {limit} characters)"


def validate_entry(entry: Entry) -> None:
    """Raise :class:`EntryError` for the first broken format rule."""
    problem = next(entry_problems(entry), None)
    if problem is not None:
        raise EntryError(problem, path=entry.path)


def _split_title_line(line: str, path: Optional[Path]) -> tuple[Optional[EntryType], str]:
    label, separator, remainder = line.partition(TITLE_SEPARATOR)
    if not separator:
        return None, capitalize(line.strip())
    try:
        entry_type = EntryType.lookup(capitalize(label.strip()))
    except ValueError as exc:
        raise EntryError(str(exc), path=path) from exc
    return entry_type, capitalize(remainder.strip())


def _split_blocks(lines: Iterable[str]) -> list[str]:
    """Group body lines into blocks separated by blank lines.

    Prose lines are joined with single spaces. Fenced code blocks keep their
    lines and indentation.
    """
    blocks: list[str] = []
    prose: list[str] = []
    fence: Optional[list[str]] = None

    def flush_prose() -> None:
        if prose:
            blocks.append(" ".join(prose))
            prose.clear()

    for line in lines:
        if fence is not None:
            fence.append(line.rstrip())
            if line.strip().startswith(CODE_FENCE):
                blocks.append("\n".join(fence))
                fence = None
            continue
        if line.startswith(CODE_FENCE):
            flush_prose()
            fence = [line.rstrip()]
            continue
        stripped = line.strip()
        if not stripped:
            flush_prose()
            continue
        prose.append(stripped)

    if fence is not None:
        blocks.append("\n".join(fence))
    flush_prose()
    return blocks


def _parse_urls(block: str, path: Optional[Path]) -> tuple[str, ...]:
    urls: list[str] = []
    for token in block.split():
        try:
            parse_url(token)
        except ValueError as exc:
            raise EntryError(f"unable to parse url '{token}': {exc}", path=path) from exc
        urls.append(token)
    return tuple(urls)


def parse_entry(
    content: str,
    *,
    path: Optional[Path] = None,
    tracker: Optional[Tracker] = None,
) -> Entry:
    """Parse the text of an entry file.

    The first line holds ``<Type>: <title>``. The remaining lines form
    paragraphs; the last paragraph is a whitespace-separated list of
    reference URLs.
    """
    lines = content.removeprefix(BYTE_ORDER_MARK).splitlines()
    if not lines:
        raise EntryError("unable to read first line, the entry file is empty", path=path)

    entry_type, title = _split_title_line(lines[0], path)
    blocks = _split_blocks(lines[1:])
    urls: tuple[str, ...] = ()
    if blocks:
        urls = _parse_urls(blocks.pop(), path)

    entry = Entry(
        type=entry_type,
        title=title,
        paragraphs=tuple(capitalize(block.strip()) for block in blocks),
        urls=urls,
        references=classify_urls(urls, tracker),
        path=path,
    )
    validate_entry(entry)
    return entry


def read_entry(
    path: Path,
    *,
    filesystem: Optional[FileSystem] = None,
    tracker: Optional[Tracker] = None,
) -> Entry:
    """Read and parse a single entry file."""
    filesystem = filesystem or LocalFileSystem()
    try:
        content = filesystem.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise EntryError(f"unable to read entry file: {exc}", path=path) from exc
    return parse_entry(content, path=path, tracker=tracker)


def entry_paths(directory: Path, *, filesystem: Optional[FileSystem] = None) -> list[Path]:
    """Return the entry files of a release directory in name order.

    A release directory holds only files; a nested directory is an error.
    """
    filesystem = filesystem or LocalFileSystem()
    try:
        items = filesystem.list_directory(directory)
    except OSError as exc:
        raise ConfigError(f"unable to list release directory: {exc}", path=directory) from exc
    names: list[str] = []
    for item in items:
        if item.name in RESERVED_NAMES or item.name.startswith("."):
            continue
        if item.is_dir:
            raise EntryError(
                "unexpected directory inside a release directory", path=directory / item.name
            )
        names.append(item.name)
    return [directory / name for name in sorted(names)]


def _entry_sort_key(entry: Entry) -> int:
    if entry.type is None:
        return len(EntryType) + 1
    return entry.type.priority


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Order entries by type priority, keeping the given order within a type."""
    return sorted(entries, key=_entry_sort_key)


def collect_entries(
    directory: Path,
    *,
    filesystem: Optional[FileSystem] = None,
    tracker: Optional[Tracker] = None,
) -> list[Entry]:
    """Read every entry of a release directory, ordered by type priority."""
    filesystem = filesystem or LocalFileSystem()
    entries = [
        read_entry(path, filesystem=filesystem, tracker=tracker)
        for path in entry_paths(directory, filesystem=filesystem)
    ]
    log_debug(f"read {len(entries)} entries from {directory}")
    return sort_entries(entries)
