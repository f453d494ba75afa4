"""Fingerprints — truncated SHA-256 digests used for cache identity.

One hashing contract is shared by the bundle generator, the directory
abstraction, and the versioned path helpers::

    fingerprint(b"body{}")          # "a1b2..." (16 hex chars)
    asset_path("images/logo.svg")   # "/assets/<hash16>.svg"
    client_paths("my_client")       # ClientPaths("/js/<hash16>.js", ...)

Note that the path helpers hash the identifying *string*, not any file
content, so their URLs do not change when the underlying file does.
"""

import hashlib
from dataclasses import dataclass
from pathlib import PurePosixPath

from tabby._types import Fingerprint

FINGERPRINT_LENGTH = 16


def fingerprint(data: bytes | str) -> Fingerprint:
    """Return the first 16 hex characters of the SHA-256 digest of *data*.

    Strings are hashed as their UTF-8 encoding.  The result depends on the
    bytes alone: no path, timestamp, or host information goes in.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()[:FINGERPRINT_LENGTH]


def asset_path(path: str) -> str:
    """Return the versioned URL for an asset path.

    ``asset_path("images/logo.svg")`` -> ``"/assets/<hash16>.svg"``

    Raises:
        ValueError: If *path* has no file extension.

    """
    extension = PurePosixPath(path).suffix
    if not extension:
        msg = f"Asset path {path!r} has no file extension"
        raise ValueError(msg)
    return f"/assets/{fingerprint(path)}{extension}"


@dataclass(frozen=True, slots=True)
class ClientPaths:
    """Versioned URLs of a compiled client bundle.

    Attributes:
        path_js: JavaScript loader, ``/js/<hash16>.js``.
        path_wasm: WebAssembly module, ``/js/<hash16>_bg.wasm``.

    """

    path_js: str
    path_wasm: str


def client_paths(name: str) -> ClientPaths:
    """Return the JS and WASM URLs for the client bundle called *name*."""
    digest = fingerprint(name)
    return ClientPaths(
        path_js=f"/js/{digest}.js",
        path_wasm=f"/js/{digest}_bg.wasm",
    )
