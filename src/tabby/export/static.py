"""Static export — replay the route table onto disk.

Writes a complete, server-independent file tree: every asset from the
build output, plus one HTML file per concrete path of every static route.
Dynamic routes are skipped; they have no finite set of outputs.

Each export is a full rebuild.  The destination is deleted and recreated
first, and any failure aborts the whole run with :class:`ExportError`.
Partial output is left in place for the next run's clean step to remove.
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from tabby._errors import ExportError
from tabby.routes.route import DynamicRoute

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabby.routes.route import RouteInitializer, StaticRoute

logger = logging.getLogger("tabby.export")


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (``"/blog/"`` for pages, the relative
            asset path for assets).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "asset"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during export, in write order.
        total_pages: Number of rendered pages.
        total_assets: Number of copied asset files.
        skipped_routes: Patterns of dynamic routes that were not exported.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the destination directory.

    """

    files: tuple[ExportedFile, ...]
    total_pages: int
    total_assets: int
    skipped_routes: tuple[str, ...]
    duration_ms: float
    output_dir: Path


class StaticExporter:
    """Exports a route table and its assets as static files.

    Args:
        routes: Route initializers, exported in order.
        assets_dir: Name of the asset directory inside the build output.

    """

    def __init__(
        self,
        routes: Sequence[RouteInitializer],
        *,
        assets_dir: str = "output",
    ) -> None:
        self._routes = tuple(routes)
        self._assets_dir = assets_dir

    def export(self, out_dir: Path, dist_dir: Path) -> ExportResult:
        """Run the full export pipeline and return the result.

        Pipeline order:
            1. Recreate the destination directory
            2. Copy assets from ``out_dir/<assets_dir>``
            3. Render static routes (dynamic routes are skipped)

        Raises:
            ExportError: If any step fails.

        """
        from tabby.export.assets import copy_assets

        start = time.perf_counter()
        dist_dir = Path(dist_dir).absolute()

        self._clean_output(dist_dir)

        files: list[ExportedFile] = []
        files.extend(copy_assets(Path(out_dir) / self._assets_dir, dist_dir))

        skipped: list[str] = []
        for init in self._routes:
            route = init.init()
            if isinstance(route, DynamicRoute):
                logger.debug("skipping dynamic route %s", init.pattern)
                skipped.append(init.pattern)
                continue
            files.extend(self._render_route(init.pattern, route, dist_dir))

        elapsed = (time.perf_counter() - start) * 1000
        result = ExportResult(
            files=tuple(files),
            total_pages=sum(1 for f in files if f.source_type == "page"),
            total_assets=sum(1 for f in files if f.source_type == "asset"),
            skipped_routes=tuple(skipped),
            duration_ms=elapsed,
            output_dir=dist_dir,
        )
        logger.info(
            "exported %d pages and %d assets to %s in %.0fms",
            result.total_pages, result.total_assets, dist_dir, elapsed,
        )
        return result

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self, dist_dir: Path) -> None:
        """Remove and recreate the destination directory."""
        try:
            if dist_dir.exists():
                shutil.rmtree(dist_dir)
            dist_dir.mkdir(parents=True)
        except OSError as exc:
            msg = f"Failed to recreate export directory {str(dist_dir)!r}: {exc}"
            raise ExportError(msg) from exc

    def _render_route(
        self,
        pattern: str,
        route: StaticRoute,
        dist_dir: Path,
    ) -> list[ExportedFile]:
        """Render every concrete path of a static route to HTML files."""
        results: list[ExportedFile] = []

        for path in route.export_paths(pattern):
            t0 = time.perf_counter()
            filepath = dist_dir / output_filename(path)
            if not filepath.resolve().is_relative_to(dist_dir.resolve()):
                msg = f"Route path {path!r} escapes the export directory"
                raise ExportError(msg)

            try:
                html = route.render(path)
            except Exception as exc:
                msg = f"Failed to render {path!r} (route {pattern!r}): {exc}"
                raise ExportError(msg) from exc

            size = self._write_html(filepath, html)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("rendered %s -> %s", path, filepath)

            results.append(ExportedFile(
                source_path=path,
                output_path=filepath,
                source_type="page",
                size_bytes=size,
                duration_ms=elapsed,
            ))

        return results

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write_html(filepath: Path, html: str) -> int:
        """Write HTML content to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        """
        data = html.encode("utf-8")
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            filepath.write_bytes(data)
        except OSError as exc:
            msg = f"Failed to write {str(filepath)!r}: {exc}"
            raise ExportError(msg) from exc
        return len(data)


def output_filename(path: str) -> str:
    """Map a route path to its file name relative to the export root.

    ``/``           -> ``index.html``
    ``/blog/``      -> ``blog/index.html``
    ``/about``      -> ``about.html``
    ``/docs/intro`` -> ``docs/intro.html``

    Raises:
        ExportError: If *path* does not start with ``/``.

    """
    if not path.startswith("/"):
        msg = f"Route path {path!r} must start with '/'"
        raise ExportError(msg)
    if path == "/":
        return "index.html"
    if path.endswith("/"):
        return f"{path[1:]}index.html"
    return f"{path[1:]}.html"
