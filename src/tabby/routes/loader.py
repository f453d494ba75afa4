"""Route loader — discover page routes from a ``routes/`` directory.

Scans a ``routes/`` directory for Python modules and turns each into a
:class:`RouteInitializer`, using a file-path convention for the pattern:

    routes/index.py          -> /
    routes/about.py          -> /about
    routes/blog/index.py     -> /blog/
    routes/blog/post.py      -> path = "/blog/{slug}"  (explicit override)

A module defines its route in one of three ways::

    def render(path):          # static page
        return "<h1>About</h1>"

    def paths():               # optional: concrete paths for export
        return ["/blog/a", "/blog/b"]

    async def handler(request):  # dynamic page
        return Response("...")

    def route():               # full control: return a Route yourself
        return StaticRoute(render=...)

Modules may also export ``path: str`` to override the derived pattern.
"""

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

from tabby._errors import ConfigError
from tabby.routes.route import (
    DynamicRoute,
    Route,
    RouteInitializer,
    StaticRoute,
    route_key,
)

logger = logging.getLogger("tabby.routes")

_INDEX_STEM = "index"


def discover_routes(routes_dir: Path) -> tuple[RouteInitializer, ...]:
    """Scan *routes_dir* for route modules and return their initializers.

    Skips ``__pycache__`` directories and files whose names start with ``_``.
    Modules defining none of ``route``, ``render``, or ``handler`` are
    ignored.  Returns an empty tuple when *routes_dir* does not exist.
    Initializers come back in sorted file order.

    Raises:
        ConfigError: On duplicate patterns, conflicting definitions, or a
            module that fails to import.

    """
    if not routes_dir.is_dir():
        return ()

    initializers: list[RouteInitializer] = []
    seen: dict[str, tuple[str, Path]] = {}

    for py_file in sorted(routes_dir.rglob("*.py")):
        if py_file.name.startswith("_"):
            continue
        if "__pycache__" in py_file.parts:
            continue

        module = _load_module(py_file, routes_dir)
        init = _extract_initializer(module, py_file, routes_dir)
        if init is None:
            continue

        # "/blog" and "/blog/" land on the same router node
        key = route_key(init.pattern)
        if key in seen:
            other_pattern, other_file = seen[key]
            msg = (
                f"Duplicate route pattern {init.pattern!r}: "
                f"{other_pattern!r} in {other_file} and {init.pattern!r} in {py_file} "
                f"match the same paths"
            )
            raise ConfigError(msg)
        seen[key] = (init.pattern, py_file)
        initializers.append(init)
        logger.debug("discovered route %s from %s", init.pattern, py_file)

    return tuple(initializers)


def _load_module(py_file: Path, routes_dir: Path) -> ModuleType:
    """Import a Python file as a module without touching ``sys.path``."""
    relative = py_file.relative_to(routes_dir)
    parts = list(relative.with_suffix("").parts)
    module_name = "tabby_routes." + ".".join(parts)

    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load route module {py_file}"
        raise ConfigError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Failed to load route module {py_file}: {exc}"
        raise ConfigError(msg) from exc

    return module


def derive_pattern(py_file: Path, routes_dir: Path) -> str:
    """Derive a URL pattern from a file's position relative to *routes_dir*.

    ``routes/index.py``       -> ``/``
    ``routes/about.py``       -> ``/about``
    ``routes/blog/index.py``  -> ``/blog/``

    """
    parts = list(py_file.relative_to(routes_dir).with_suffix("").parts)
    if parts[-1] == _INDEX_STEM:
        parts[-1] = ""
    return "/" + "/".join(parts)


def _extract_initializer(
    module: ModuleType,
    py_file: Path,
    routes_dir: Path,
) -> RouteInitializer | None:
    """Build the initializer for a loaded module, or None if it has no route."""
    pattern = getattr(module, "path", None)
    if pattern is None:
        pattern = derive_pattern(py_file, routes_dir)
    elif not isinstance(pattern, str):
        msg = f"Route module {py_file}: 'path' must be a str, got {type(pattern).__name__}"
        raise ConfigError(msg)
    if not pattern.startswith("/"):
        pattern = "/" + pattern

    name = str(py_file.relative_to(routes_dir))
    factory = getattr(module, "route", None)
    render = getattr(module, "render", None)
    handler = getattr(module, "handler", None)

    if factory is not None:
        if not callable(factory):
            msg = f"Route module {py_file}: 'route' must be callable"
            raise ConfigError(msg)
        return RouteInitializer(pattern=pattern, factory=factory, name=name)

    if render is not None and handler is not None:
        msg = (
            f"Route module {py_file} defines both 'render' and 'handler'; "
            f"a page is either static or dynamic."
        )
        raise ConfigError(msg)

    if render is not None:
        _validate_render(render, py_file)
        paths = getattr(module, "paths", None)
        if paths is not None and not callable(paths):
            msg = f"Route module {py_file}: 'paths' must be callable"
            raise ConfigError(msg)
        return RouteInitializer(
            pattern=pattern,
            factory=_static_factory(render, paths),
            name=name,
        )

    if handler is not None:
        _validate_handler(handler, py_file)
        return RouteInitializer(
            pattern=pattern,
            factory=_dynamic_factory(handler),
            name=name,
        )

    return None


def _static_factory(render: object, paths: object) -> Callable[[], Route]:
    def factory() -> Route:
        return StaticRoute(render=render, paths=paths)  # type: ignore[arg-type]

    return factory


def _dynamic_factory(handler: object) -> Callable[[], Route]:
    def factory() -> Route:
        return DynamicRoute(handler=handler)  # type: ignore[arg-type]

    return factory


def _validate_render(func: object, source: Path) -> None:
    """Validate that ``render`` is a plain function accepting the path.

    Raises:
        ConfigError: If ``render`` is async or takes no parameters.

    """
    if not callable(func) or inspect.iscoroutinefunction(func):
        msg = (
            f"Route function 'render' in {source} must be a regular function "
            f"(use 'def render(path)')."
        )
        raise ConfigError(msg)
    if len(inspect.signature(func).parameters) < 1:
        msg = f"Route function 'render' in {source} must accept the request path."
        raise ConfigError(msg)


def _validate_handler(func: object, source: Path) -> None:
    """Validate that a handler is async and accepts at least one parameter.

    Raises:
        ConfigError: If the handler is not async or has no parameters.

    """
    if not inspect.iscoroutinefunction(func):
        msg = (
            f"Route handler 'handler' in {source} must be an async function "
            f"(use 'async def handler(request)')."
        )
        raise ConfigError(msg)

    sig = inspect.signature(func)  # type: ignore[arg-type]
    if len(sig.parameters) < 1:
        msg = (
            f"Route handler 'handler' in {source} must accept at least one "
            f"parameter (the chirp Request object)."
        )
        raise ConfigError(msg)
