"""Directory abstraction — read-only asset stores.

Two implementations share a single capability, ``read(path)``:

- :class:`EmbeddedDirectory` holds every file in memory with a precomputed
  fingerprint.  Built once (usually by importing a generated bundle) and
  never mutated afterwards, so any number of request tasks may read it
  without locking.
- :class:`FilesystemDirectory` wraps a root path and reads from disk on
  every call.  Content may change between requests, so its files never
  carry a fingerprint.

Which one an application uses is decided by the ``debug`` flag when the
bundle is generated (see :mod:`tabby.bundle`).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from tabby._types import AssetPath, Fingerprint


@dataclass(frozen=True, slots=True)
class File:
    """A single asset.

    Attributes:
        data: Raw file bytes.
        hash: Content fingerprint, or *None* when the file came from the live
            filesystem and no fingerprint can be trusted.

    """

    data: bytes
    hash: Fingerprint | None = None


class Directory(Protocol):
    """Anything that can look up an asset by relative path."""

    def read(self, path: AssetPath) -> File | None: ...

    def paths(self) -> Iterator[AssetPath]: ...


class EmbeddedDirectory:
    """Immutable in-memory mapping from relative path to :class:`File`."""

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[AssetPath, File]) -> None:
        self._files: Mapping[AssetPath, File] = MappingProxyType(dict(files))

    def read(self, path: AssetPath) -> File | None:
        return self._files.get(path)

    def paths(self) -> Iterator[AssetPath]:
        return iter(sorted(self._files))

    @property
    def files(self) -> Mapping[AssetPath, File]:
        """Read-only view of the embedded files."""
        return self._files

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"EmbeddedDirectory({len(self._files)} files)"


class FilesystemDirectory:
    """Live view of a directory on disk.  Never caches."""

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def read(self, path: AssetPath) -> File | None:
        """Read *path* under the root.

        Returns *None* when the path is missing, is not a regular file,
        resolves outside the root, or cannot name a file at all (embedded
        NUL).  Other OS errors propagate.
        """
        if "\x00" in path:
            return None
        target = (self._root / path).resolve()
        if not target.is_relative_to(self._root):
            return None
        if not target.is_file():
            return None
        try:
            data = target.read_bytes()
        except FileNotFoundError:
            # Removed between the check and the read
            return None
        return File(data=data)

    def paths(self) -> Iterator[AssetPath]:
        if not self._root.is_dir():
            return iter(())
        return iter(sorted(
            p.relative_to(self._root).as_posix()
            for p in self._root.rglob("*")
            if p.is_file()
        ))

    def __repr__(self) -> str:
        return f"FilesystemDirectory({str(self._root)!r})"
