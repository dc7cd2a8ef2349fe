"""Data models for generated pages.

Immutable frozen dataclasses plus the protocols of the collaborators the
page creator talks to: the page registry it writes to and the query
engine it reads collection records from.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class GeneratedPage:
    """A page created from a source file.

    Identity is ``(route, component)``.

    Attributes:
        route: URL the page is served at (``/blog/hello``).
        component: Absolute path of the owning source file.
        context: Extra data for the page renderer.  Collection pages
            carry the record id under ``"id"``.
    """

    route: str
    component: str
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str]:
        return (self.route, self.component)


@runtime_checkable
class PageActions(Protocol):
    """The page registry consuming create/delete calls.

    Both calls are idempotent.
    """

    def create_page(self, page: GeneratedPage) -> None: ...

    def delete_page(self, route: str, component: str) -> None: ...

    def pages(self) -> Iterable[GeneratedPage]: ...


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Outcome of running a collection query."""

    data: Mapping[str, Any] | None = None
    errors: tuple[str, ...] = ()


@runtime_checkable
class QueryRunner(Protocol):
    """The query engine collection queries are executed against."""

    async def run(self, query: str) -> QueryResult: ...
