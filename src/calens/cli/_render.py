"""Render command for the changelog CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import click

from ..errors import CalensError, ConfigError
from ..releases import discover_releases, select_releases
from ..render import build_changes, load_template, render_changes
from ..utils import emit_output, log_debug, log_success, log_warning
from ._core import CLIContext, fail

__all__ = [
    "render_changelog",
    "run_render",
    "render_cmd",
]

STDOUT_MARKER = "-"


def render_changelog(
    ctx: CLIContext,
    *,
    template: Optional[Path] = None,
    versions: Sequence[str] = (),
) -> str:
    """Return the rendered changelog without writing it anywhere."""
    config = ctx.ensure_config()
    if template is None:
        template_path = config.template_path(ctx.input_dir)
    elif template.is_absolute():
        template_path = template
    else:
        template_path = ctx.input_dir / template
    log_debug(f"using template: {template_path}")

    compiled = load_template(template_path)
    releases = select_releases(discover_releases(ctx.input_dir), versions)
    changes = build_changes(releases, tracker=config.tracker)
    if not changes:
        log_warning(f"no release in {ctx.input_dir} has any entries")
    log_debug(f"rendering {len(changes)} release(s)")
    return render_changes(compiled, changes, path=template_path)


def _write_output(content: str, output: Optional[Path]) -> None:
    if output is None or str(output) == STDOUT_MARKER:
        emit_output(content, newline=False)
        return
    try:
        output.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"unable to write changelog: {exc}", path=output) from exc
    log_success(f"wrote changelog to {output}")


def run_render(
    ctx: CLIContext,
    *,
    output: Optional[Path] = None,
    template: Optional[Path] = None,
    versions: Sequence[str] = (),
) -> None:
    """Python wrapper for rendering the changelog to a file or stdout."""
    try:
        content = render_changelog(ctx, template=template, versions=versions)
        _write_output(content, output)
    except CalensError as error:
        raise fail(error) from error


@click.command("render")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the changelog to this file (default: print to stdout).",
)
@click.option(
    "--template",
    "-t",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Read the template from this file (relative to the input directory).",
)
@click.option(
    "--release",
    "-r",
    "versions",
    multiple=True,
    help="Only render the given version; repeat to select several.",
)
@click.pass_obj
def render_cmd(
    ctx: CLIContext,
    output: Optional[Path],
    template: Optional[Path],
    versions: tuple[str, ...],
) -> None:
    """Render the changelog with the configured template."""

    run_render(ctx, output=output, template=template, versions=versions)
