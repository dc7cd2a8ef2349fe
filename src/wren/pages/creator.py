"""Turn one page source file into generated pages.

Plain files produce one page at :func:`~wren.pages.paths.create_path`.
Collection templates run their query and produce one page per returned
record, at the route derived from that record.

Failures scoped to one file (a bad template, a bad query, an empty
result) or to one record (a missing required field) are reported and
skipped.  Anything else propagates to the caller.
"""

import logging
from pathlib import Path
from typing import Any

import anyio

from wren.collection.derive import MISSING, NodeResolver, derive_path, get_field
from wren.collection.query import default_query, expand_query, extract_query_string, validate_query
from wren.collection.template import PathTemplate, is_collection_path, parse_template
from wren.config import PageCreatorConfig
from wren.diagnostics import DiagnosticsSink
from wren.errors import (
    CollectionQueryError,
    FieldResolutionError,
    QueryShapeError,
    TemplateSyntaxError,
)
from wren.pages.paths import create_path, is_ignored, is_valid_path
from wren.pages.types import GeneratedPage, PageActions, QueryRunner

logger = logging.getLogger("wren.pages")


class PageCreator:
    """Creates pages for files under one root directory."""

    __slots__ = ("_actions", "_config", "_get_node", "_query_runner", "_reporter", "root")

    def __init__(
        self,
        config: PageCreatorConfig,
        actions: PageActions,
        reporter: DiagnosticsSink,
        *,
        query_runner: QueryRunner | None = None,
        get_node: NodeResolver | None = None,
    ) -> None:
        self._config = config
        self._actions = actions
        self._reporter = reporter
        self._query_runner = query_runner
        self._get_node = get_node
        self.root = config.root

    def component_path(self, relative_path: str) -> str:
        """Absolute path used as the owning-file identity of a page."""
        return str(self.root / relative_path)

    async def create_pages(self, relative_path: str) -> list[GeneratedPage]:
        """Create the pages for *relative_path* and return them."""
        if not is_valid_path(relative_path) or is_ignored(relative_path, self._config.ignore):
            logger.debug("Skipping %s", relative_path)
            return []

        component = self.component_path(relative_path)
        if not is_collection_path(relative_path):
            page = GeneratedPage(route=create_path(relative_path), component=component)
            self._actions.create_page(page)
            return [page]

        return await self._create_collection_pages(relative_path, component)

    async def _create_collection_pages(
        self, relative_path: str, component: str
    ) -> list[GeneratedPage]:
        try:
            template = parse_template(relative_path)
            query_string = await self._read_query(relative_path, template)
            validate_query(query_string, template)
        except (TemplateSyntaxError, QueryShapeError) as exc:
            self._reporter.error(exc)
            return []

        if self._query_runner is None:
            logger.warning("No query runner configured; skipping collection %s", relative_path)
            return []

        result = await self._query_runner.run(expand_query(query_string, template))
        records = _collection_nodes(result.data, template.collection_name)
        if result.errors or not records:
            self._reporter.error(CollectionQueryError(relative_path, tuple(result.errors)))
            return []

        pages = []
        for record in records:
            try:
                route = derive_path(template, record, self._get_node)
            except FieldResolutionError as exc:
                self._reporter.error(exc)
                continue
            record_id = get_field(record, "id")
            page = GeneratedPage(
                route=route,
                component=component,
                context={"id": None if record_id is MISSING else record_id},
            )
            self._actions.create_page(page)
            pages.append(page)
        return pages

    async def _read_query(self, relative_path: str, template: PathTemplate) -> str:
        source = await anyio.Path(self.root / relative_path).read_text(encoding="utf-8")
        query_string = extract_query_string(source, Path(relative_path).suffix)
        return default_query(template) if query_string is None else query_string


def _collection_nodes(data: Any, collection_name: str) -> list[Any]:
    if not data:
        return []
    collection = data.get(collection_name) or {}
    return list(collection.get("nodes") or ())
