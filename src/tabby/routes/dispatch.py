"""Default page dispatch — compile route patterns into one function.

Any ``async (request) -> Response | None`` callable can serve as an
application's page dispatch.  :func:`compile_routes` builds one from a
route table using chirp's trie router::

    dispatch = compile_routes(initializers)
    response = await dispatch(request)   # None when no page matched

Static routes answer ``GET``; dynamic routes answer every method.  A miss
or a method mismatch yields *None*, never a 404/405: the enclosing server
decides what to send.
"""

import dataclasses
import logging
from collections.abc import Sequence

from chirp.errors import MethodNotAllowed, NotFound
from chirp.http.request import Request
from chirp.http.response import Response
from chirp.routing.route import Route as RouterEntry
from chirp.routing.router import Router

from tabby._errors import ConfigError
from tabby._types import PageDispatch
from tabby.routes.route import RouteInitializer, StaticRoute, route_key

logger = logging.getLogger("tabby.routes")

# Methods a route is registered under; variants filter further at dispatch
_METHODS: frozenset[str] = frozenset({
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS",
})


def compile_routes(initializers: Sequence[RouteInitializer]) -> PageDispatch:
    """Compile *initializers* into a page dispatch function.

    Raises:
        ConfigError: If two initializers share a pattern, including
            patterns that differ only by a trailing slash.

    """
    router = Router()
    seen: dict[str, RouteInitializer] = {}
    for init in initializers:
        key = route_key(init.pattern)
        if key in seen:
            other = seen[key]
            msg = (
                f"Duplicate route pattern {init.pattern!r}: "
                f"{other.pattern!r} ({other.name!r}) and {init.pattern!r} "
                f"({init.name!r}) match the same paths"
            )
            raise ConfigError(msg)
        seen[key] = init
        router.add(RouterEntry(
            path=init.pattern,
            handler=init.init,
            methods=_METHODS,
            name=init.name or init.pattern,
        ))
    router.compile()

    async def dispatch(request: Request) -> Response | None:
        try:
            match = router.match(request.method, request.path)
        except (NotFound, MethodNotAllowed):
            return None

        route = match.route.handler()
        if isinstance(route, StaticRoute) and request.method != "GET":
            return None

        if match.path_params:
            request = dataclasses.replace(request, path_params=match.path_params)
        logger.debug("%s %s -> %s", request.method, request.path, match.route.name)
        return await route.handle(request)

    return dispatch
