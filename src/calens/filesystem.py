"""Directory listing and file reading used by discovery and aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Mapping, Protocol, Union

PathLike = Union[str, PurePosixPath, Path]


@dataclass(frozen=True)
class DirectoryItem:
    """One name inside a listed directory."""

    name: str
    is_dir: bool


class FileSystem(Protocol):
    """Read-only view on the changelog tree."""

    def list_directory(self, path: Path) -> list[DirectoryItem]:
        """Return the items directly below ``path``; raise ``OSError`` on failure."""
        ...

    def read_text(self, path: Path) -> str:
        """Return the decoded contents of ``path``; raise ``OSError`` on failure."""
        ...


class LocalFileSystem:
    """FileSystem backed by the operating system."""

    def list_directory(self, path: Path) -> list[DirectoryItem]:
        items = [DirectoryItem(child.name, child.is_dir()) for child in Path(path).iterdir()]
        return sorted(items, key=lambda item: item.name)

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8-sig")


class MemoryFileSystem:
    """FileSystem holding files in a mapping of POSIX paths to contents.

    Directories exist implicitly as the parents of the stored files, plus any
    listed in ``directories``.
    """

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        *,
        directories: tuple[str, ...] = (),
    ) -> None:
        self._files: dict[PurePosixPath, str] = {}
        self._dirs: set[PurePosixPath] = set()
        for directory in directories:
            self.add_directory(directory)
        for name, content in (files or {}).items():
            self.add_file(name, content)

    def add_directory(self, path: PathLike) -> None:
        current = PurePosixPath(path)
        self._dirs.add(current)
        self._dirs.update(current.parents)

    def add_file(self, path: PathLike, content: str) -> None:
        file_path = PurePosixPath(path)
        self._files[file_path] = content
        self._dirs.update(file_path.parents)

    def list_directory(self, path: Path) -> list[DirectoryItem]:
        directory = PurePosixPath(path)
        if directory not in self._dirs:
            raise FileNotFoundError(f"no such directory: '{directory}'")
        items: dict[str, DirectoryItem] = {}
        for candidate in self._dirs:
            if candidate != directory and candidate.parent == directory:
                items[candidate.name] = DirectoryItem(candidate.name, True)
        for candidate in self._files:
            if candidate.parent == directory:
                items[candidate.name] = DirectoryItem(candidate.name, False)
        return [items[name] for name in sorted(items)]

    def read_text(self, path: Path) -> str:
        file_path = PurePosixPath(path)
        try:
            return self._files[file_path]
        except KeyError:
            if file_path in self._dirs:
                raise IsADirectoryError(f"is a directory: '{file_path}'") from None
            raise FileNotFoundError(f"no such file: '{file_path}'") from None
