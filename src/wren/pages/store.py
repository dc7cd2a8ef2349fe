"""In-memory page registry.

The default :class:`~wren.pages.types.PageActions` implementation.  A
build pipeline that keeps its own page table can pass its own actions
object instead; the sync engine only needs create, delete, and listing.
"""

import logging
from collections.abc import Iterator

from wren.errors import RouteConflictError
from wren.pages.types import GeneratedPage

logger = logging.getLogger("wren.pages")


class PageStore:
    """Page table keyed by route.

    One page per route.  Creating the same ``(route, component)`` again
    replaces the page's context; creating a route owned by a different
    component raises :class:`RouteConflictError`.  Deleting an unknown
    page is a no-op.
    """

    __slots__ = ("_pages",)

    def __init__(self) -> None:
        self._pages: dict[str, GeneratedPage] = {}

    def create_page(self, page: GeneratedPage) -> None:
        existing = self._pages.get(page.route)
        if existing is not None and existing.component != page.component:
            raise RouteConflictError(page.route, existing.component, page.component)
        self._pages[page.route] = page
        if existing is None:
            logger.info("Created page %s", page.route)

    def delete_page(self, route: str, component: str) -> None:
        existing = self._pages.get(route)
        if existing is None or existing.component != component:
            return
        del self._pages[route]
        logger.info("Deleted page %s", route)

    def pages(self) -> Iterator[GeneratedPage]:
        # Copy so callers may delete while iterating
        return iter(list(self._pages.values()))

    def get(self, route: str) -> GeneratedPage | None:
        return self._pages.get(route)

    @property
    def routes(self) -> list[str]:
        return sorted(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, route: object) -> bool:
        return route in self._pages
