"""Wren CLI — route listing and live page watching.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Pages directory")
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="fnmatch pattern of files that never become pages (repeatable)",
    )
    parser.add_argument(
        "--ext",
        action="append",
        default=[],
        metavar="EXT",
        help="Page file extension, e.g. .py (repeatable, replaces the defaults)",
    )
    parser.add_argument(
        "--runner",
        default=None,
        help="Import string of a query runner for collection pages (e.g. myapp.data:runner)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — filesystem pages with collection routes.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Scan once and list generated pages")
    _add_common_arguments(routes_parser)

    # -- wren watch -------------------------------------------------------
    watch_parser = subparsers.add_parser("watch", help="Keep pages in sync with the directory")
    _add_common_arguments(watch_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "watch":
        from wren.cli._watch import run_watch

        run_watch(args)
