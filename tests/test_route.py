"""Tests for tabby.routes.route — route variants and initializers."""

import pytest
from chirp.http.response import Response

from tabby.routes.route import (
    DynamicRoute,
    RouteInitializer,
    StaticRoute,
    path_components,
    route_key,
)
from tests.conftest import make_request


class TestStaticRoute:
    """StaticRoute — render(path) wrapped as a 200 HTML response."""

    @pytest.mark.asyncio
    async def test_handle_renders_request_path(self) -> None:
        route = StaticRoute(render=lambda path: f"<h1>{path}</h1>")
        response = await route.handle(make_request("/about"))
        assert response.status == 200
        assert response.text == "<h1>/about</h1>"
        assert response.content_type.startswith("text/html")

    def test_export_paths_default_to_pattern(self) -> None:
        route = StaticRoute(render=str)
        assert route.export_paths("/about") == ["/about"]

    def test_export_paths_from_enumerator(self) -> None:
        route = StaticRoute(render=str, paths=lambda: ("/a", "/b"))
        assert route.export_paths("/{slug}") == ["/a", "/b"]

    def test_frozen(self) -> None:
        route = StaticRoute(render=str)
        with pytest.raises(AttributeError):
            route.render = repr  # type: ignore[misc]


class TestDynamicRoute:
    """DynamicRoute — delegates to the async handler."""

    @pytest.mark.asyncio
    async def test_handle_delegates(self) -> None:
        seen = []

        async def handler(request):
            seen.append(request.method)
            return Response(body="created", status=201)

        route = DynamicRoute(handler=handler)
        response = await route.handle(make_request("/items", method="POST"))
        assert response.status == 201
        assert response.text == "created"
        assert seen == ["POST"]


class TestRouteInitializer:
    """RouteInitializer — a fresh route on every init()."""

    def test_init_builds_fresh_instances(self) -> None:
        calls = []

        def factory():
            calls.append(1)
            return StaticRoute(render=lambda path: "x", paths=lambda: [])

        init = RouteInitializer(pattern="/", factory=factory)
        first = init.init()
        second = init.init()
        assert first is not second
        assert len(calls) == 2


class TestPathComponents:
    """path_components — segments after the leading slash."""

    def test_root(self) -> None:
        assert path_components("/") == [""]

    def test_nested(self) -> None:
        assert path_components("/blog/post") == ["blog", "post"]

    def test_trailing_slash(self) -> None:
        assert path_components("/blog/") == ["blog", ""]


class TestRouteKey:
    """route_key — patterns the router cannot tell apart share a key."""

    def test_trailing_slash_ignored(self) -> None:
        assert route_key("/blog") == route_key("/blog/") == "/blog"

    def test_root_kept(self) -> None:
        assert route_key("/") == "/"

    def test_placeholders_untouched(self) -> None:
        assert route_key("/blog/{slug}") == "/blog/{slug}"
