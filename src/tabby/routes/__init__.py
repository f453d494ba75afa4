"""Page routes — definitions, discovery, and dispatch.

Public API::

    from tabby.routes import StaticRoute, RouteInitializer, compile_routes

    routes = (RouteInitializer("/", lambda: StaticRoute(render=home)),)
    dispatch = compile_routes(routes)
"""

from tabby.routes.dispatch import compile_routes
from tabby.routes.loader import discover_routes
from tabby.routes.route import (
    DynamicRoute,
    Route,
    RouteInitializer,
    StaticRoute,
    path_components,
)

__all__ = [
    "DynamicRoute",
    "Route",
    "RouteInitializer",
    "StaticRoute",
    "compile_routes",
    "discover_routes",
    "path_components",
]
