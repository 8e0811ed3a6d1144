"""Logging and console helpers shared by the CLI and the core."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console

_LOGGER = logging.getLogger("calens")

# Symbol printed in front of each message, keyed by its role.
_MARKERS = {
    "info": "\033[94;1mi\033[0m",
    "success": "\033[92;1m✔\033[0m",
    "warning": "○",
    "error": "\033[31m✘\033[0m",
    "debug": "\033[95m◆\033[0m",
}

console = Console(stderr=True)


def configure_logging(debug: bool = False) -> logging.Logger:
    """Send calens messages to stderr; ``debug`` also shows discovery details."""
    level = logging.DEBUG if debug else logging.INFO
    for handler in list(_LOGGER.handlers):
        _LOGGER.removeHandler(handler)
        handler.close()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(level)
    _LOGGER.propagate = False
    return _LOGGER


def _log(role: str, message: str, level: int) -> None:
    marker = _MARKERS[role]
    for line in message.splitlines() or [""]:
        _LOGGER.log(level, f"{marker} {line}" if line else marker)


def log_info(message: str) -> None:
    _log("info", message, logging.INFO)


def log_success(message: str) -> None:
    """Report a completed step, such as a written changelog file."""
    _log("success", message, logging.INFO)


def log_warning(message: str) -> None:
    _log("warning", message, logging.WARNING)


def log_error(message: str) -> None:
    """Report a problem found in the changelog tree."""
    _log("error", message, logging.ERROR)


def log_debug(message: str) -> None:
    _log("debug", message, logging.DEBUG)


def emit_output(content: str, *, newline: bool = True) -> None:
    """Write rendered output to stdout, keeping it apart from log messages."""
    click.echo(content, nl=newline)
