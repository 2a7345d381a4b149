"""Source directories holding the assets of a pass.

The packaging pipeline only needs a listing of relative paths to bytes, so
it depends on the ``SourceDirectory`` protocol rather than the filesystem.
``FilesystemSource`` reads a ``.pass`` directory on disk; ``InMemorySource``
serves a mapping and is used for synthetic directories in tests and by
callers that render assets in memory.
"""

import os
import typing as t
from collections.abc import Mapping
from pathlib import Path, PurePosixPath

import structlog

from passkit.errors import CantReadEntry, CantReadTempDir

logger = structlog.get_logger(__name__)


class SourceDirectory(t.Protocol):
    """A listing of pass assets addressed by archive-relative paths."""

    def list_entries(self) -> list[str]:
        """List every file as a forward-slash relative path, sorted.

        Raises:
            CantReadTempDir: If the directory cannot be enumerated.
        """
        ...

    def read_entry(self, name: str) -> bytes:
        """Read a file by its relative path.

        Raises:
            CantReadEntry: If the entry is missing or cannot be read.
        """
        ...

    def has_entry(self, name: str) -> bool:
        """Whether a file exists at the relative path."""
        ...


class FilesystemSource:
    """A source directory on disk, walked recursively."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FilesystemSource({str(self.path)!r})"

    def list_entries(self) -> list[str]:
        if not self.path.is_dir():
            logger.error("source_directory_unreadable", path=str(self.path))
            raise CantReadTempDir(str(self.path))

        entries: list[str] = []

        def _on_error(error: OSError) -> None:
            raise CantReadTempDir(f"{error.filename}: {error.strerror}") from error

        for root, _dirs, files in os.walk(self.path, onerror=_on_error):
            for filename in files:
                relative = (Path(root) / filename).relative_to(self.path)
                entries.append(relative.as_posix())
        return sorted(entries)

    def read_entry(self, name: str) -> bytes:
        try:
            return (self.path / PurePosixPath(name)).read_bytes()
        except OSError as e:
            logger.error("source_entry_unreadable", path=str(self.path), entry=name, error=str(e))
            raise CantReadEntry(name) from e

    def has_entry(self, name: str) -> bool:
        return (self.path / PurePosixPath(name)).is_file()


class InMemorySource:
    """A synthetic source directory backed by a mapping of path to bytes."""

    def __init__(self, files: Mapping[str, bytes] | None = None) -> None:
        self.files = dict(files or {})

    def __repr__(self) -> str:
        return f"InMemorySource({sorted(self.files)!r})"

    def list_entries(self) -> list[str]:
        return sorted(self.files)

    def read_entry(self, name: str) -> bytes:
        try:
            return self.files[name]
        except KeyError as e:
            raise CantReadEntry(name) from e

    def has_entry(self, name: str) -> bool:
        return name in self.files


def as_source(source: "SourceDirectory | str | os.PathLike[str]") -> SourceDirectory:
    """Wrap a filesystem path in a ``FilesystemSource``; pass other sources through."""
    if isinstance(source, (str, os.PathLike)):
        return FilesystemSource(source)
    return source
