"""Tabby application — pages first, then assets.

TabbyApp owns the asset directory, the page dispatch function, and the
route table.  The public functions (embed, build, serve) are the primary
entry points.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from chirp.http.request import Request
from chirp.http.response import Response

from tabby._errors import ConfigError
from tabby._types import PageDispatch
from tabby.config import TabbyConfig
from tabby.config_loader import load_config
from tabby.directory import Directory

if TYPE_CHECKING:
    from chirp import App
    from chirp.middleware.protocol import AnyResponse, Next

    from tabby.export.static import ExportResult
    from tabby.routes.route import RouteInitializer

logger = logging.getLogger("tabby.app")

# Fixed extension table; anything else gets the generic binary type
CONTENT_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".js": "text/javascript",
    ".svg": "image/svg+xml",
    ".wasm": "application/wasm",
}

_FALLBACK_CONTENT_TYPE = "application/octet-stream"


def content_type(path: str) -> str | None:
    """Return the content type for *path* from the extension table, if any."""
    for extension, value in CONTENT_TYPES.items():
        if path.endswith(extension):
            return value
    return None


class TabbyApp:
    """A site: pages from the route table, assets from a directory.

    Args:
        directory: Asset store (embedded bundle or live filesystem).
        routes: Route initializers, in registration order.  Export walks them.
        page_dispatch: Page router.  Compiled from *routes* when omitted.
        assets_dir: Asset directory name inside the build output, used by
            :meth:`export`.

    """

    __slots__ = ("_assets_dir", "_directory", "_page_dispatch", "_routes")

    def __init__(
        self,
        directory: Directory,
        routes: Sequence[RouteInitializer] = (),
        *,
        page_dispatch: PageDispatch | None = None,
        assets_dir: str = "output",
    ) -> None:
        self._directory = directory
        self._routes = tuple(routes)
        if page_dispatch is None:
            from tabby.routes.dispatch import compile_routes

            page_dispatch = compile_routes(self._routes)
        self._page_dispatch = page_dispatch
        self._assets_dir = assets_dir

    @property
    def directory(self) -> Directory:
        return self._directory

    @property
    def routes(self) -> tuple[RouteInitializer, ...]:
        return self._routes

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def handle(self, request: Request) -> Response | None:
        """Answer *request* with a page or an asset.

        Returns *None* when neither matched; the caller sends the 404.
        """
        response = await self.serve_page(request)
        if response is None:
            response = await self.serve_asset(request)
        return response

    async def serve_page(self, request: Request) -> Response | None:
        return await self._page_dispatch(request)

    async def serve_asset(self, request: Request) -> Response | None:
        """Serve a file from the asset directory.

        Only ``GET`` is answered; other methods return *None* so the caller
        can decide between 404 and 405.  Files with a fingerprint carry it
        as ``ETag``, and a request whose ``If-None-Match`` equals it exactly
        gets an empty 304.

        Extensions missing from :data:`CONTENT_TYPES` are sent as
        ``application/octet-stream``; a chirp response always carries a
        ``Content-Type`` header, so it cannot be left out.
        """
        if request.method != "GET":
            return None

        path = request.path.removeprefix("/")
        file = self._directory.read(path)
        if file is None:
            logger.debug("asset miss: %s", path)
            return None

        ctype = content_type(path) or _FALLBACK_CONTENT_TYPE
        if file.hash is None:
            return Response(body=file.data, content_type=ctype)

        if request.headers.get("if-none-match") == file.hash:
            response = Response(body=b"", status=304, content_type=ctype)
        else:
            response = Response(body=file.data, content_type=ctype)
        return response.with_header("ETag", file.hash)

    def middleware(self) -> TabbyMiddleware:
        """Return a chirp middleware that answers from :meth:`handle`.

        Requests neither a page nor an asset matched fall through to the
        next handler, so the enclosing chirp app produces 404 and 405.
        """
        return TabbyMiddleware(self)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, out_dir: Path, dist_dir: Path) -> ExportResult:
        """Write assets and static pages under *dist_dir*.

        See :class:`tabby.export.static.StaticExporter`.
        """
        from tabby.export.static import StaticExporter

        exporter = StaticExporter(self._routes, assets_dir=self._assets_dir)
        return exporter.export(out_dir, dist_dir)


class TabbyMiddleware:
    """Chirp middleware adapter for a :class:`TabbyApp`."""

    __slots__ = ("_app",)

    def __init__(self, app: TabbyApp) -> None:
        self._app = app

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        response = await self._app.handle(request)
        if response is None:
            return await next(request)
        return response


def load_app(config: TabbyConfig) -> TabbyApp:
    """Assemble a TabbyApp from configuration.

    Uses the generated bundle when present.  Without one, debug mode falls
    back to the live asset directory; release mode refuses to start.

    Raises:
        ConfigError: If no bundle exists in release mode, or routes fail
            to load.

    """
    from tabby.bundle import load_bundle
    from tabby.directory import FilesystemDirectory
    from tabby.routes.loader import discover_routes

    routes = discover_routes(config.routes_path)

    directory: Directory
    if config.bundle_path.is_file():
        directory = load_bundle(config.bundle_path)
    elif config.debug:
        directory = FilesystemDirectory(config.assets_path)
    else:
        msg = (
            f"No asset bundle at {config.bundle_path}. "
            f"Run 'tabby embed' first, or enable debug mode."
        )
        raise ConfigError(msg)

    return TabbyApp(directory, routes, assets_dir=config.assets_dir)


def _create_chirp_app(app: TabbyApp, config: TabbyConfig) -> App:
    """Create a chirp App that serves *app* through its middleware."""
    from chirp import App, AppConfig

    chirp_app = App(config=AppConfig(
        debug=config.debug,
        host=config.host,
        port=config.port,
    ))
    chirp_app.add_middleware(app.middleware())
    return chirp_app


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def embed(root: str | Path = ".", **kwargs: object) -> Path:
    """Generate the asset bundle for the configured asset directory.

    Embeds every file in release mode; wraps the live directory when
    ``debug`` is set.

    Args:
        root: Path to the project root directory.
        **kwargs: Override TabbyConfig fields.

    Returns:
        Path to the written bundle module.

    """
    from tabby.bundle import write_bundle

    config = load_config(Path(root), **kwargs)
    target = write_bundle(config.assets_path, config.bundle_path, debug=config.debug)
    print(
        f"  Bundled {config.assets_path} -> {target}"
        f" ({'debug' if config.debug else 'embedded'})",
        file=sys.stderr,
    )
    return target


def build(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Export the site as static files.

    Copies the asset tree and renders every static route to HTML.  Dynamic
    routes are skipped.  Output is deployable to any static host.

    Args:
        root: Path to the project root directory.
        **kwargs: Override TabbyConfig fields.

    """
    from tabby.export.static import StaticExporter
    from tabby.routes.loader import discover_routes

    config = load_config(Path(root), **kwargs)
    routes = discover_routes(config.routes_path)

    exporter = StaticExporter(routes, assets_dir=config.assets_dir)
    result = exporter.export(config.out_path, config.dist_path)

    _print_export_summary(result)
    return result


def _print_export_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  Exported {result.total_pages} page{'s' if result.total_pages != 1 else ''}",
    ]
    if result.total_assets > 0:
        lines.append(
            f"  Copied {result.total_assets} asset{'s' if result.total_assets != 1 else ''}"
        )
    if result.skipped_routes:
        lines.append(f"  Skipped dynamic: {', '.join(result.skipped_routes)}")
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Serve the site through chirp.

    Pages and assets come from the TabbyApp; anything it does not answer
    falls through to chirp, which sends the 404 or 405.

    Args:
        root: Path to the project root directory.
        **kwargs: Override TabbyConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()

    app = load_app(config)
    chirp_app = _create_chirp_app(app, config)

    load_ms = (time.perf_counter() - t0) * 1000
    print(
        f"  tabby serving {len(app.routes)} route{'s' if len(app.routes) != 1 else ''}"
        f" on http://{config.host}:{config.port} (loaded in {load_ms:.0f}ms)",
        file=sys.stderr,
    )

    chirp_app.run(host=config.host, port=config.port)
