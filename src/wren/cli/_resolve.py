"""Query runner resolution — ``"module:attribute"`` strings to runners.

Shared by ``wren routes`` and ``wren watch`` to locate the query engine
that collection pages read their records from.
"""

import argparse
import importlib
import logging

from wren.config import PageCreatorConfig
from wren.pages.types import QueryRunner


def resolve_runner(import_string: str) -> QueryRunner:
    """Resolve an import string to a :class:`QueryRunner`.

    Accepts ``"module:attribute"``.  When the attribute is omitted it
    defaults to ``"runner"``.  A factory is called when the resolved
    object is callable but not itself a runner.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a query runner.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "runner"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if isinstance(obj, QueryRunner):
        return obj
    if callable(obj):
        obj = obj()
        if isinstance(obj, QueryRunner):
            return obj

    msg = f"{import_string!r} resolved to {type(obj).__name__}, expected a query runner"
    raise TypeError(msg)


def config_from_args(args: argparse.Namespace) -> PageCreatorConfig:
    """Build a :class:`PageCreatorConfig` from common CLI arguments."""
    if args.ext:
        exts = tuple(e if e.startswith(".") else f".{e}" for e in args.ext)
        return PageCreatorConfig(path=args.path, ignore=tuple(args.ignore), extensions=exts)
    return PageCreatorConfig(path=args.path, ignore=tuple(args.ignore))


def configure_logging(verbose: bool, default: int = logging.INFO) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else default,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
