"""Kiln CLI — kiln build / kiln watch / kiln serve.

Entry point for the ``kiln`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every subcommand. Unset flags fall back to config files."""
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--output", default=None, help="Output directory (default: dist)")


def _add_build_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pages", dest="pages_dir", default=None, help="Page directory")
    parser.add_argument("--public", dest="public_dir", default=None, help="Asset directory")
    parser.add_argument(
        "--base-url", default=None, help="Base URL for sitemap generation",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Remove the output directory before building",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        default=None,
        help="Minify generated HTML, including inline CSS and JS",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the kiln CLI."""
    parser = argparse.ArgumentParser(
        prog="kiln",
        description="Static site builder for Python page modules.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # kiln build
    build_parser = subparsers.add_parser("build", help="Build the static site")
    _add_layout_args(build_parser)
    _add_build_args(build_parser)

    # kiln watch
    watch_parser = subparsers.add_parser(
        "watch", help="Build, then rebuild when pages change",
    )
    _add_layout_args(watch_parser)
    _add_build_args(watch_parser)

    # kiln serve
    serve_parser = subparsers.add_parser("serve", help="Serve the output directory")
    _add_layout_args(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    return parser


def _get_version() -> str:
    from kiln import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """CLI flags that were actually given, keyed by KilnConfig field."""
    fields = (
        "output", "pages_dir", "public_dir", "base_url", "clean", "minify", "host", "port",
    )
    return {
        name: getattr(args, name)
        for name in fields
        if getattr(args, name, None) is not None
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from kiln._errors import KilnError
    from kiln.app import build, serve, watch
    from kiln.banner import print_error

    commands = {"build": build, "watch": watch, "serve": serve}

    try:
        commands[args.command](root=args.root, **_overrides(args))
    except KilnError as exc:
        print_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
