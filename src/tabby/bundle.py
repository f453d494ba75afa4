"""Bundle generator — turn an asset directory into an importable module.

Run once at build time (``tabby embed``).  In release mode the generated
module holds every file as a bytes literal together with its precomputed
fingerprint, so importing it performs no file I/O and no parsing beyond
Python's own bytecode load::

    DIRECTORY = EmbeddedDirectory({
        'css/site.css': File(data=b'body{}', hash='4c1e...'),
    })

In debug mode the module only wraps the canonical root in a
:class:`~tabby.directory.FilesystemDirectory`, so edits show up without
regenerating.

Any failure (bad root, unreadable file) raises :class:`EmbedError` before
the target is touched.  There is no partial bundle.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import sys
from pathlib import Path

from tabby._errors import ConfigError, EmbedError
from tabby.directory import Directory, EmbeddedDirectory, File, FilesystemDirectory
from tabby.hashing import fingerprint

logger = logging.getLogger("tabby.embed")

_HEADER = '"""Asset bundle generated by ``tabby embed``. Do not edit."""\n'


def _raise(exc: OSError) -> None:
    raise exc


def canonical_root(root: str | Path) -> Path:
    """Resolve *root* to an absolute, symlink-free directory path.

    Raises:
        EmbedError: If the path does not exist or is not a directory.

    """
    try:
        resolved = Path(root).resolve(strict=True)
    except OSError as exc:
        msg = f"Cannot resolve asset root {str(root)!r}: {exc}"
        raise EmbedError(msg) from exc
    if not resolved.is_dir():
        msg = f"Asset root {str(resolved)!r} is not a directory"
        raise EmbedError(msg)
    return resolved


def walk_files(root: Path) -> list[Path]:
    """Return every regular file below *root*, sorted.

    Symlinks are skipped, whether they point at files or directories.

    Raises:
        EmbedError: If any directory cannot be listed.

    """
    files: list[Path] = []
    try:
        for dirpath, _dirnames, filenames in root.walk(on_error=_raise):
            for name in filenames:
                path = dirpath / name
                if path.is_symlink() or not path.is_file():
                    continue
                files.append(path)
    except OSError as exc:
        msg = f"Failed to walk asset root {str(root)!r}: {exc}"
        raise EmbedError(msg) from exc
    return sorted(files)


def scan_directory(root: str | Path) -> dict[str, File]:
    """Read and fingerprint every file below *root*.

    Returns a mapping from forward-slash relative path to :class:`File`,
    in sorted key order.

    Raises:
        EmbedError: If the root is invalid or any file cannot be read.

    """
    resolved = canonical_root(root)
    files: dict[str, File] = {}
    for path in walk_files(resolved):
        key = path.relative_to(resolved).as_posix()
        try:
            data = path.read_bytes()
        except OSError as exc:
            msg = f"Failed to read {str(path)!r}: {exc}"
            raise EmbedError(msg) from exc
        files[key] = File(data=data, hash=fingerprint(data))
        logger.debug("embedded %s (%d bytes, %s)", key, len(data), files[key].hash)
    return files


def include_dir(root: str | Path, *, debug: bool = False) -> Directory:
    """Build a directory in-process, as importing a generated bundle would.

    Args:
        root: Asset directory.
        debug: Return a live :class:`FilesystemDirectory` instead of
            embedding the files.

    """
    if debug:
        return FilesystemDirectory(canonical_root(root))
    return EmbeddedDirectory(scan_directory(root))


def render_bundle(root: str | Path, *, debug: bool = False) -> str:
    """Return the Python source of a bundle module for *root*."""
    resolved = canonical_root(root)
    lines = [_HEADER]

    if debug:
        lines.extend([
            "from tabby.directory import FilesystemDirectory",
            "",
            "DEBUG = True",
            f"SOURCE = {str(resolved)!r}",
            "DIRECTORY = FilesystemDirectory(SOURCE)",
            "",
        ])
        return "\n".join(lines)

    files = scan_directory(resolved)
    lines.extend([
        "from tabby.directory import EmbeddedDirectory, File",
        "",
        "DEBUG = False",
        f"SOURCE = {str(resolved)!r}",
        "DIRECTORY = EmbeddedDirectory({",
    ])
    for key, file in files.items():
        lines.append(f"    {key!r}: File(data={file.data!r}, hash={file.hash!r}),")
    lines.extend(["})", ""])
    return "\n".join(lines)


def write_bundle(root: str | Path, target: str | Path, *, debug: bool = False) -> Path:
    """Generate the bundle for *root* and write it to *target*.

    The module is rendered completely before anything is written, then moved
    into place with an atomic rename.

    Returns:
        The absolute path of the written module.

    Raises:
        EmbedError: If embedding or writing fails.

    """
    source = render_bundle(root, debug=debug)
    target = Path(target).absolute()
    tmp = target.with_name(target.name + ".tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(source, encoding="utf-8")
        os.replace(tmp, target)
    except OSError as exc:
        msg = f"Failed to write bundle {str(target)!r}: {exc}"
        raise EmbedError(msg) from exc

    logger.info(
        "wrote %s bundle for %s to %s",
        "debug" if debug else "embedded", root, target,
    )
    return target


def load_bundle(path: str | Path) -> Directory:
    """Import a generated bundle module and return its directory.

    Raises:
        ConfigError: If the module is missing, fails to import, or does not
            define ``DIRECTORY``.

    """
    path = Path(path).absolute()
    if not path.is_file():
        msg = f"Asset bundle {str(path)!r} not found (run 'tabby embed' first)"
        raise ConfigError(msg)

    module_name = f"tabby_bundle_{fingerprint(str(path))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load asset bundle {str(path)!r}"
        raise ConfigError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to import asset bundle {str(path)!r}: {exc}"
        raise ConfigError(msg) from exc

    directory = getattr(module, "DIRECTORY", None)
    if not callable(getattr(directory, "read", None)):
        msg = f"Asset bundle {str(path)!r} does not define DIRECTORY"
        raise ConfigError(msg)
    return directory
