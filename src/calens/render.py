"""Template rendering of releases and their entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from jinja2 import Environment, StrictUndefined, Template, TemplateError, TemplateSyntaxError

from .entries import Entry, collect_entries
from .errors import ConfigError
from .filesystem import FileSystem, LocalFileSystem
from .links import Tracker
from .releases import Release
from .text import capitalize, wrap_text
from .utils import log_debug

HELPERS = {
    "wrap": wrap_text,
    "capitalize": capitalize,
}


@dataclass(frozen=True)
class ReleaseChanges:
    """What a template sees for one release."""

    version: str
    date: str
    entries: tuple[Entry, ...]
    release: Release


def build_changes(
    releases: Iterable[Release],
    *,
    filesystem: Optional[FileSystem] = None,
    tracker: Optional[Tracker] = None,
) -> list[ReleaseChanges]:
    """Collect the entries of each release, dropping releases without entries."""
    filesystem = filesystem or LocalFileSystem()
    changes: list[ReleaseChanges] = []
    for release in releases:
        entries = collect_entries(release.path, filesystem=filesystem, tracker=tracker)
        if not entries:
            log_debug(f"skipping release {release.version} without entries")
            continue
        changes.append(
            ReleaseChanges(
                version=release.version,
                date=release.date_label,
                entries=tuple(entries),
                release=release,
            )
        )
    return changes


def create_environment() -> Environment:
    """Return the Jinja environment with the formatting helpers installed."""
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.globals.update(HELPERS)
    env.filters.update(HELPERS)
    return env


def compile_template(source: str, *, path: Optional[Path] = None) -> Template:
    """Compile template source, reporting syntax errors with their location."""
    try:
        return create_environment().from_string(source)
    except TemplateSyntaxError as exc:
        raise ConfigError(
            f"unable to compile template (line {exc.lineno}): {exc.message}", path=path
        ) from exc


def load_template(path: Path, *, filesystem: Optional[FileSystem] = None) -> Template:
    """Read and compile the template file."""
    filesystem = filesystem or LocalFileSystem()
    try:
        source = filesystem.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"unable to read template: {exc}", path=path) from exc
    return compile_template(source, path=path)


def render_changes(
    template: Template,
    changes: Sequence[ReleaseChanges],
    *,
    path: Optional[Path] = None,
) -> str:
    """Render the collected releases with a compiled template."""
    try:
        return template.render(releases=list(changes))
    except (TemplateError, TypeError) as exc:
        raise ConfigError(f"error executing template: {exc}", path=path) from exc
