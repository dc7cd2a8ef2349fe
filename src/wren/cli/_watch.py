"""``wren watch`` — keep pages in sync with a directory.

Runs a full session: startup scans, then live add/remove events from the
filesystem until interrupted.  Page changes are logged.
"""

import argparse
import logging
import sys

import anyio

from wren.cli._resolve import config_from_args, configure_logging, resolve_runner
from wren.errors import ConfigurationError, ReconciliationError
from wren.pages.store import PageStore
from wren.session import PageCreatorSession

logger = logging.getLogger("wren.cli")


def run_watch(args: argparse.Namespace) -> None:
    """Watch ``args.path`` until Ctrl+C.

    Exits with status 1 when the configuration is invalid or an event
    cannot be applied.
    """
    configure_logging(args.verbose)
    try:
        runner = resolve_runner(args.runner) if args.runner else None
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    session = PageCreatorSession(
        config_from_args(args),
        PageStore(),
        query_runner=runner,
        get_node=getattr(runner, "get_node", None),
    )

    try:
        anyio.run(session.run)
    except KeyboardInterrupt:
        logger.info("Stopped.")
    except (ConfigurationError, ReconciliationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
