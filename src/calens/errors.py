"""Error types raised by the changelog core."""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional


class CalensError(ValueError):
    """Base class for all fatal changelog errors.

    The optional ``path`` names the file or folder that caused the failure so
    the message points the author at the source to fix.
    """

    def __init__(self, message: str, *, path: Optional[PurePath] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ConfigError(CalensError):
    """Input directory, config file, or template could not be used."""


class ReleaseNameError(CalensError):
    """A release folder name does not follow the version/date grammar."""


class EntryError(CalensError):
    """An entry file could not be read or violates the entry format."""
