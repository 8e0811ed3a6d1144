"""CLI package for calens.

This package contains the modular CLI implementation:
- _core.py: CLIContext, error conversion, main entry point
- _render.py: render command (the default)
- _validate.py: validate and list commands
"""

from __future__ import annotations

from ._core import (
    CLIContext,
    DEFAULT_COMMAND,
    VERSION_FLAGS,
    create_cli_context,
    fail,
    _create_cli_group,
    main,
)
from ._render import (
    render_changelog,
    render_cmd,
    run_render,
)
from ._validate import (
    list_cmd,
    run_validate,
    validate_cmd,
)

# Create the main CLI group
cli = _create_cli_group()

# Register all commands with the cli group
cli.add_command(render_cmd)
cli.add_command(validate_cmd)
cli.add_command(list_cmd)


__all__ = [
    # Core
    "cli",
    "main",
    "CLIContext",
    "DEFAULT_COMMAND",
    "VERSION_FLAGS",
    "create_cli_context",
    "fail",
    # Render
    "render_changelog",
    "render_cmd",
    "run_render",
    # Validate
    "run_validate",
    "validate_cmd",
    "list_cmd",
]
