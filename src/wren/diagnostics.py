"""Diagnostics sink for page creator failures.

Errors carry a stable code and a context mapping (see :mod:`wren.errors`).
A :class:`Reporter` maps the code to a message template and writes it
through stdlib logging.  Callers that want different formatting (a
terminal UI, structured JSON) implement :class:`DiagnosticsSink`.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from wren.errors import PageCreatorError

logger = logging.getLogger("wren.pages")

_PREFIX = "PageCreator: "

# code -> message template over the error context
ERROR_MAP: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "1": lambda ctx: f"{_PREFIX}{ctx['sourceMessage']}",
    "2": lambda ctx: (
        f"{_PREFIX}Your collection graphql query is incorrect. You must use the "
        f'fragment "...CollectionPagesQueryFragment" to pull data nodes\n\n'
        f"Offending query: {ctx['queryString']}"
    ),
    "3": lambda ctx: (
        f"{_PREFIX}Tried to create pages from the collection builder.\n"
        "Unfortunately, the query came back empty. There may be an error in "
        "your query:\n\n" + "\n".join(ctx.get("errors", ()))
    ).strip(),
    "4": lambda ctx: (
        f"{_PREFIX}Could not find value in the following node for key "
        f"{ctx['slugPart']} (transformed to {ctx['key']})"
    ),
    "5": lambda ctx: (
        f"{_PREFIX}Collection page builder encountered an error parsing the "
        "filepath. To use collection paths the schema to follow is "
        f"{{Model.field}}. The problematic part is: {ctx['part']}."
    ),
    "6": lambda ctx: f"{_PREFIX}{ctx['sourceMessage']}",
}


def format_error(error: PageCreatorError) -> str:
    """Render an error through the code table.

    Unknown codes fall back to the generic template.
    """
    template = ERROR_MAP.get(error.code, ERROR_MAP["1"])
    return template(error.context)


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Anything that accepts page creator errors."""

    def error(self, error: PageCreatorError) -> None: ...

    def panic(self, error: PageCreatorError) -> None: ...


class Reporter:
    """Default sink: formats via :data:`ERROR_MAP` and logs.

    ``error()`` is for failures scoped to one file or one resolution.
    ``panic()`` is for failures that end the session; it only records
    them, the caller is responsible for stopping.

    Reported errors are kept in ``history`` for inspection by the CLI
    and by tests.
    """

    __slots__ = ("_logger", "history")

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger
        self.history: list[PageCreatorError] = []

    def error(self, error: PageCreatorError) -> None:
        self.history.append(error)
        self._logger.error(
            "[%s] %s", error.code, format_error(error), extra={"wren_context": error.context}
        )

    def panic(self, error: PageCreatorError) -> None:
        self.history.append(error)
        self._logger.critical(
            "[%s] %s", error.code, format_error(error), extra={"wren_context": error.context}
        )
