"""Validate and list commands for the changelog CLI."""

from __future__ import annotations

from collections import Counter

import click
from rich.table import Table

from ..entries import EntryType, collect_entries
from ..errors import CalensError
from ..releases import discover_releases
from ..utils import console, log_error, log_info, log_success
from ..validate import run_validation
from ._core import CLIContext, fail

__all__ = [
    "run_validate",
    "validate_cmd",
    "list_cmd",
]


def run_validate(ctx: CLIContext) -> None:
    """Python wrapper for validating changelog files."""

    config = ctx.ensure_config()
    issues = run_validation(ctx.input_dir, tracker=config.tracker)
    if not issues:
        log_success("all changelog files look good")
        return

    for issue in issues:
        log_error(f"{issue.path}: {issue.message}")
    raise SystemExit(1)


@click.command("validate")
@click.pass_obj
def validate_cmd(ctx: CLIContext) -> None:
    """Check every release folder name and entry file."""

    run_validate(ctx)


def _type_breakdown(counts: Counter[EntryType]) -> str:
    return ", ".join(
        f"{entry_type.short} {counts[entry_type]}" for entry_type in EntryType if counts[entry_type]
    )


@click.command("list")
@click.pass_obj
def list_cmd(ctx: CLIContext) -> None:
    """List releases in changelog order."""

    config = ctx.ensure_config()
    try:
        releases = discover_releases(ctx.input_dir)
        if not releases:
            log_info(f"no releases found in {ctx.input_dir}")
            return

        table = Table(box=None, padding=(0, 2, 0, 0), show_header=True)
        table.add_column("VERSION", style="cyan")
        table.add_column("DATE")
        table.add_column("ENTRIES", justify="right")
        table.add_column("TYPES", style="dim")

        for release in releases:
            entries = collect_entries(release.path, tracker=config.tracker)
            counts = Counter(entry.type for entry in entries if entry.type is not None)
            table.add_row(
                release.version,
                release.date_label,
                str(len(entries)),
                _type_breakdown(counts),
            )
    except CalensError as error:
        raise fail(error) from error

    console.print(table)
