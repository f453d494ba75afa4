"""Page routes — static (pure render) and dynamic (async handler).

A route is one of two frozen variants, with no shared base class::

    StaticRoute(render=lambda path: "<h1>Home</h1>")
    StaticRoute(render=render_post, paths=lambda: ["/blog/a", "/blog/b"])
    DynamicRoute(handler=search)

Both answer ``await route.handle(request)``, so live serving and static
export use identical definitions.  Export only ever calls static routes;
a dynamic page has no finite set of outputs.

Routes are built by a :class:`RouteInitializer` factory on every dispatch
and every export iteration.  No instance outlives the call that made it.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from chirp.http.request import Request
from chirp.http.response import Response

from tabby._types import HandlerFunc, PathsFunc, RenderFunc, RoutePattern


@dataclass(frozen=True, slots=True)
class StaticRoute:
    """A page whose HTML depends on the request path alone.

    Attributes:
        render: Returns the HTML for a concrete path.
        paths: Enumerates the concrete paths this route answers for, or
            *None* when the route's pattern is its only path.

    """

    render: RenderFunc
    paths: PathsFunc | None = None

    async def handle(self, request: Request) -> Response:
        return Response(body=self.render(request.path))

    def export_paths(self, pattern: RoutePattern) -> Sequence[str]:
        """Concrete paths to write during export."""
        if self.paths is None:
            return [pattern]
        return list(self.paths())


@dataclass(frozen=True, slots=True)
class DynamicRoute:
    """A page produced per request by an async handler."""

    handler: HandlerFunc

    async def handle(self, request: Request) -> Response:
        return await self.handler(request)


type Route = StaticRoute | DynamicRoute


@dataclass(frozen=True, slots=True)
class RouteInitializer:
    """A route pattern plus the factory that builds its route.

    Attributes:
        pattern: URL pattern with optional placeholders (``/blog/{slug}``).
        factory: Zero-argument callable returning a fresh :data:`Route`.
        name: Human-readable name for logs and errors.

    """

    pattern: RoutePattern
    factory: Callable[[], Route]
    name: str = ""

    def init(self) -> Route:
        """Build a fresh route instance."""
        return self.factory()


def path_components(path: str) -> list[str]:
    """Split a request path into its segments.

    ``"/"``          -> ``[""]``
    ``"/blog/post"`` -> ``["blog", "post"]``
    ``"/blog/"``     -> ``["blog", ""]``

    """
    return path.split("/")[1:]


def route_key(pattern: RoutePattern) -> str:
    """Return the key the router files *pattern* under.

    The router ignores a trailing slash, so ``/blog`` and ``/blog/`` share
    one key and cannot both be registered.
    """
    return pattern.rstrip("/") or "/"
