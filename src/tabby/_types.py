"""Shared type definitions for tabby."""

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chirp.http.request import Request
    from chirp.http.response import Response

# Content fingerprint: 16 lowercase hex characters
type Fingerprint = str

# Asset path relative to a directory root, forward-slash separated ("css/site.css")
type AssetPath = str

# Route URL pattern, possibly with placeholders (e.g., "/blog/{slug}")
type RoutePattern = str

# Renders the HTML for a concrete request path
type RenderFunc = Callable[[str], str]

# Enumerates the concrete paths a static route answers for
type PathsFunc = Callable[[], Sequence[str]]

# Async handler for a dynamic route
type HandlerFunc = Callable[[Request], Awaitable[Response]]

# Opaque page dispatch: a response when a page route matched, else None
type PageDispatch = Callable[[Request], Awaitable[Response | None]]
