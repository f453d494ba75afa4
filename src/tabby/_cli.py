"""Tabby CLI — tabby embed / tabby build / tabby serve.

Entry point for the ``tabby`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tabby CLI."""
    parser = argparse.ArgumentParser(
        prog="tabby",
        description="Embedded-asset site runtime with static export.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tabby embed
    embed_parser = subparsers.add_parser(
        "embed",
        help="Generate the asset bundle module",
    )
    embed_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    embed_parser.add_argument(
        "--debug", action="store_true",
        help="Wrap the live asset directory instead of embedding it",
    )
    embed_parser.add_argument("--bundle", default=None, help="Bundle module path")

    # tabby build
    build_parser = subparsers.add_parser(
        "build",
        help="Export site as static files",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument("--dist", default=None, help="Export directory")

    # tabby serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve pages and assets through chirp",
    )
    serve_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--debug", action="store_true",
        help="Serve the live asset directory when no bundle exists",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from tabby import __version__

    return __version__


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _overrides(**values: object) -> dict[str, object]:
    """Drop unset CLI options so file config is not overridden by defaults."""
    return {k: v for k, v in values.items() if v is not None and v is not False}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    from tabby._errors import TabbyError
    from tabby.app import build, embed, serve

    try:
        if args.command == "embed":
            embed(root=args.root, **_overrides(debug=args.debug, bundle=args.bundle))
        elif args.command == "build":
            build(root=args.root, **_overrides(dist=args.dist))
        elif args.command == "serve":
            serve(
                root=args.root,
                **_overrides(host=args.host, port=args.port, debug=args.debug),
            )
    except TabbyError as exc:
        print(f"tabby: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
