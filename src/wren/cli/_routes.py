"""``wren routes`` — list generated pages.

Runs the startup scans once (no watching) and prints a table of
ROUTE and COMPONENT for every page created.
"""

import argparse
import logging
import sys

import anyio

from wren.cli._resolve import config_from_args, configure_logging, resolve_runner
from wren.errors import ConfigurationError, ReconciliationError
from wren.pages.store import PageStore
from wren.pages.types import GeneratedPage
from wren.session import PageCreatorSession


def run_routes(args: argparse.Namespace) -> None:
    """Scan ``args.path`` and print its pages.

    Exits with status 1 when the configuration is invalid or the scan
    fails.
    """
    configure_logging(args.verbose, default=logging.WARNING)
    try:
        runner = resolve_runner(args.runner) if args.runner else None
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    store = PageStore()
    session = PageCreatorSession(
        config_from_args(args),
        store,
        query_runner=runner,
        get_node=getattr(runner, "get_node", None),
    )
    try:
        anyio.run(session.start)
    except (ConfigurationError, ReconciliationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    pages = sorted(store.pages(), key=lambda p: p.route)
    if pages:
        _print_table(pages, str(session.config.root))
    else:
        print("No pages generated.")

    if session.registry:
        print()
        for entry in session.registry:
            print(f"{entry.collection_name} -> {entry.file_path}")


def _print_table(pages: list[GeneratedPage], root: str) -> None:
    rows = [(page.route, page.component.removeprefix(root).lstrip("/\\")) for page in pages]

    # Column widths
    max_route = max(max(len(r[0]) for r in rows), 5)  # "ROUTE" header

    fmt = f"{{:<{max_route}}}  {{}}"
    print(fmt.format("ROUTE", "COMPONENT"))
    sep_len = max_route + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for route, component in rows:
        print(fmt.format(route, component))
