"""Tabby — an embedded-asset site runtime for Python.

Packages a directory of static assets into an importable bundle (or a live
filesystem view during development), serves pages and fingerprinted assets
with ETag revalidation, and exports the whole site as plain files.

Quick start::

    import tabby

    tabby.embed("my-site/")     # Generate the asset bundle
    tabby.build("my-site/")     # Static export
    tabby.serve("my-site/")     # Live server via chirp

Programmatic use::

    from tabby import TabbyApp, StaticRoute, RouteInitializer, include_dir

    app = TabbyApp(
        include_dir("build/output"),
        [RouteInitializer("/", lambda: StaticRoute(render=home))],
    )
    response = await app.handle(request)

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "DynamicRoute",
    "EmbeddedDirectory",
    "File",
    "FilesystemDirectory",
    "RouteInitializer",
    "StaticRoute",
    "TabbyApp",
    "TabbyConfig",
    "__version__",
    "asset_path",
    "build",
    "client_paths",
    "embed",
    "fingerprint",
    "include_dir",
    "serve",
]

_LAZY: dict[str, str] = {
    "TabbyConfig": "tabby.config",
    "TabbyApp": "tabby.app",
    "embed": "tabby.app",
    "build": "tabby.app",
    "serve": "tabby.app",
    "File": "tabby.directory",
    "EmbeddedDirectory": "tabby.directory",
    "FilesystemDirectory": "tabby.directory",
    "include_dir": "tabby.bundle",
    "fingerprint": "tabby.hashing",
    "asset_path": "tabby.hashing",
    "client_paths": "tabby.hashing",
    "StaticRoute": "tabby.routes.route",
    "DynamicRoute": "tabby.routes.route",
    "RouteInitializer": "tabby.routes.route",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tabby`` fast and free of chirp until a name is used.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
