"""Shared test fixtures for tabby."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from chirp.http.request import Request


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """Create an asset directory with two files.

    ``a/x.css`` holds ``body{}`` and ``a/y.js`` holds ``console.log(1)``.
    """
    root = tmp_path / "assets"
    (root / "a").mkdir(parents=True)
    (root / "a" / "x.css").write_bytes(b"body{}")
    (root / "a" / "y.js").write_bytes(b"console.log(1)")
    return root


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project: build output with assets plus a routes/ dir.

    Layout::

        build/output/css/site.css
        build/output/favicon.svg
        routes/index.py        static, "/"
        routes/about.py        static, "/about"
        routes/blog/index.py   static, "/blog/"
        routes/blog/post.py    static with paths(), "/blog/{slug}"
        routes/search.py       dynamic, "/search"
    """
    output = tmp_path / "build" / "output"
    (output / "css").mkdir(parents=True)
    (output / "css" / "site.css").write_text("body { margin: 0; }\n")
    (output / "favicon.svg").write_text("<svg></svg>")

    routes = tmp_path / "routes"
    (routes / "blog").mkdir(parents=True)
    (routes / "index.py").write_text(
        "def render(path):\n    return '<h1>Home</h1>'\n"
    )
    (routes / "about.py").write_text(
        "def render(path):\n    return '<h1>About</h1>'\n"
    )
    (routes / "blog" / "index.py").write_text(
        "def render(path):\n    return '<h1>Blog</h1>'\n"
    )
    (routes / "blog" / "post.py").write_text(
        "path = '/blog/{slug}'\n"
        "\n"
        "def paths():\n"
        "    return ['/blog/first', '/blog/second']\n"
        "\n"
        "def render(path):\n"
        "    return f'<p>{path}</p>'\n"
    )
    (routes / "search.py").write_text(
        "from chirp.http.response import Response\n"
        "\n"
        "async def handler(request):\n"
        "    return Response(body='results for ' + request.path)\n"
    )
    return tmp_path


def make_request(
    path: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
) -> Request:
    """Build a chirp Request the way the ASGI handler does."""

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    scope: dict[str, Any] = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": raw_headers,
        "http_version": "1.1",
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }
    return Request.from_asgi(scope, receive)


def response_header(response: Any, name: str) -> str | None:
    """Return the first header value named *name* from a chirp Response."""
    lowered = name.lower()
    for key, value in response.headers:
        if key.lower() == lowered:
            return value
    return None
