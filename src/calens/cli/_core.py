"""Core CLI infrastructure: context, option parsing, and the main entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as metadata_version
from pathlib import Path
from typing import Optional

import click

from .. import __version__ as package_version
from ..config import DEFAULT_INPUT_DIRECTORY, Config, load_project_config
from ..errors import CalensError
from ..utils import configure_logging, log_debug, log_error

__all__ = [
    "CLIContext",
    "DEFAULT_COMMAND",
    "VERSION_FLAGS",
    "create_cli_context",
    "fail",
    "_create_cli_group",
    "_inject_default_command",
    "main",
]

VERSION_FLAGS = {"--version", "-V"}
DEFAULT_COMMAND = "render"

# Group-level options and whether they consume a value.
_GROUP_OPTIONS = {
    "--input": True,
    "-i": True,
    "--debug": False,
}


def _resolve_cli_version() -> str:
    try:
        return metadata_version("calens")
    except PackageNotFoundError:
        return package_version


@dataclass
class CLIContext:
    """Shared state passed to every command."""

    input_dir: Path
    debug: bool = False
    _config: Optional[Config] = None

    def ensure_config(self) -> Config:
        if self._config is None:
            try:
                self._config = load_project_config(self.input_dir)
            except CalensError as error:
                raise fail(error) from error
        return self._config


def fail(error: CalensError) -> click.ClickException:
    """Convert a core error into the exception that ends the command."""
    return click.ClickException(str(error))


def create_cli_context(
    *,
    input_dir: Optional[Path] = None,
    debug: bool = False,
) -> CLIContext:
    """Build a CLI context and configure logging."""
    configure_logging(debug)
    resolved = input_dir if input_dir is not None else DEFAULT_INPUT_DIRECTORY
    log_debug(f"using input directory: {resolved}")
    return CLIContext(input_dir=resolved, debug=debug)


def _create_cli_group() -> click.Group:
    """Create the main CLI group; commands are attached by the package."""

    @click.group(
        help="Render a changelog from per-release directories of entry files.",
    )
    @click.option(
        "--input",
        "-i",
        "input_dir",
        type=click.Path(path_type=Path, file_okay=False),
        default=DEFAULT_INPUT_DIRECTORY,
        show_default=True,
        help="Read releases and entries from this directory.",
    )
    @click.option("--debug", is_flag=True, help="Print debug messages to stderr.")
    @click.pass_context
    def _cli(ctx: click.Context, input_dir: Path, debug: bool) -> None:
        ctx.obj = create_cli_context(input_dir=input_dir, debug=debug)

    return click.version_option(version=_resolve_cli_version())(_cli)


def _inject_default_command(args: list[str], commands: set[str]) -> list[str]:
    """Insert the default command after the group options when none is given."""
    index = 0
    while index < len(args):
        arg = args[index]
        name = arg.split("=", 1)[0]
        if name not in _GROUP_OPTIONS:
            break
        consumes_value = _GROUP_OPTIONS[name] and "=" not in arg
        index += 2 if consumes_value else 1
    if index < len(args) and (args[index] in commands or args[index] in {"--help", "-h"}):
        return args
    return args[:index] + [DEFAULT_COMMAND] + args[index:]


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    # Import cli here to avoid circular import at module load time
    from . import cli

    args = list(argv) if argv is not None else list(sys.argv[1:])

    if any(flag in args for flag in VERSION_FLAGS):
        click.echo(_resolve_cli_version())
        return 0

    args = _inject_default_command(args, set(cli.commands))

    try:
        result = cli.main(args=args, prog_name="calens", standalone_mode=False)
    except click.ClickException as exc:
        exc.show(file=sys.stderr)
        exit_code = getattr(exc, "exit_code", 1)
        return exit_code if isinstance(exit_code, int) else 1
    except KeyboardInterrupt:
        log_error("operation cancelled by user (Ctrl+C).")
        return 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    return result if isinstance(result, int) else 0
