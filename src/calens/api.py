"""Python-friendly facade for invoking calens functionality."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .config import Config, DEFAULT_INPUT_DIRECTORY, load_project_config
from .entries import Entry, collect_entries
from .filesystem import FileSystem, LocalFileSystem
from .releases import Release, discover_releases, select_releases
from .render import ReleaseChanges, build_changes, compile_template, load_template, render_changes
from .validate import ValidationIssue, run_validation


class Changelog:
    """High-level helper that mirrors the CLI commands for Python callers."""

    def __init__(
        self,
        root: Path | str = DEFAULT_INPUT_DIRECTORY,
        *,
        filesystem: Optional[FileSystem] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.root = Path(root)
        self.filesystem: FileSystem = filesystem or LocalFileSystem()
        if config is None:
            # config.yaml is only read from the local disk.
            config = load_project_config(self.root) if filesystem is None else Config()
        self.config = config

    def releases(self) -> list[Release]:
        """Return all releases, most recent first."""
        return discover_releases(self.root, filesystem=self.filesystem)

    def entries(self, release: Release) -> list[Entry]:
        """Return the entries of one release in display order."""
        return collect_entries(
            release.path, filesystem=self.filesystem, tracker=self.config.tracker
        )

    def changes(self, versions: Sequence[str] = ()) -> list[ReleaseChanges]:
        """Return the template input for the selected releases."""
        releases = select_releases(self.releases(), versions)
        return build_changes(releases, filesystem=self.filesystem, tracker=self.config.tracker)

    def render(
        self,
        template: Optional[str] = None,
        *,
        template_path: Path | str | None = None,
        versions: Sequence[str] = (),
    ) -> str:
        """Render the changelog.

        ``template`` is template source text. Without it the template is read
        from ``template_path``, or from the configured template file. A
        relative ``template_path`` is resolved against the changelog root, as
        the ``--template`` option does.
        """
        source_path: Optional[Path] = None
        if template is not None:
            compiled = compile_template(template)
        else:
            if template_path is None:
                source_path = self.config.template_path(self.root)
            else:
                source_path = Path(template_path)
                if not source_path.is_absolute():
                    source_path = self.root / source_path
            compiled = load_template(source_path, filesystem=self.filesystem)
        changes = self.changes(versions)
        return render_changes(compiled, changes, path=source_path)

    def validate(self) -> list[ValidationIssue]:
        """Return one issue for every file that fails to parse."""
        return run_validation(self.root, filesystem=self.filesystem, tracker=self.config.tracker)
