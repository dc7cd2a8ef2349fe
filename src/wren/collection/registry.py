"""Collection registry — plural query name to template file.

Mirrors the ``Router`` + ``Route`` pattern: ``CollectionTemplate`` is the
frozen definition, ``CollectionRegistry`` is the lookup table.  The table
is filled once by :func:`scan_collections` during startup and frozen;
after that it is read-only and safe to share between any number of
concurrent path-field resolutions.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import anyio

from wren.collection.query import default_query, extract_query_string, validate_query
from wren.collection.template import PathTemplate, parse_template
from wren.diagnostics import DiagnosticsSink
from wren.errors import (
    CollectionConflictError,
    ConfigurationError,
    QueryShapeError,
    TemplateSyntaxError,
)
from wren.pages.discovery import find_collection_files

logger = logging.getLogger("wren.collection")


@dataclass(frozen=True, slots=True)
class CollectionTemplate:
    """A template file registered for a collection.

    Attributes:
        collection_name: Plural query name (``allPost``).
        template: The parsed path template.
        file_path: Template file, relative to the pages root.
        query_string: The validated (unexpanded) collection query.
    """

    collection_name: str
    template: PathTemplate
    file_path: str
    query_string: str


class CollectionRegistry:
    """Session-scoped collection table.

    A name is claimed by the first file that registers it; a second file
    for the same name raises :class:`CollectionConflictError` and leaves
    the existing entry untouched.
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: dict[str, CollectionTemplate] = {}
        self._frozen = False

    def register(self, entry: CollectionTemplate) -> None:
        if self._frozen:
            msg = f"Cannot register {entry.collection_name!r}: the collection registry is frozen"
            raise ConfigurationError(msg)
        existing = self._entries.get(entry.collection_name)
        if existing is not None:
            if existing.file_path == entry.file_path:
                return
            raise CollectionConflictError(
                entry.collection_name, existing.file_path, entry.file_path
            )
        self._entries[entry.collection_name] = entry

    def lookup(self, collection_name: str) -> CollectionTemplate | None:
        return self._entries.get(collection_name)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, collection_name: object) -> bool:
        return collection_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CollectionTemplate]:
        return iter(self._entries.values())


async def load_collection_template(root: Path, relative_path: str) -> CollectionTemplate:
    """Read, parse, and validate one template file.

    Raises:
        TemplateSyntaxError: The file path is not a valid template.
        QueryShapeError: The declared query has the wrong shape.
    """
    template = parse_template(relative_path)
    source = await anyio.Path(root / relative_path).read_text(encoding="utf-8")
    query_string = extract_query_string(source, Path(relative_path).suffix)
    if query_string is None:
        query_string = default_query(template)
    validate_query(query_string, template)
    return CollectionTemplate(
        collection_name=template.collection_name,
        template=template,
        file_path=relative_path,
        query_string=query_string,
    )


async def scan_collections(
    root: Path,
    registry: CollectionRegistry,
    reporter: DiagnosticsSink,
    extensions: tuple[str, ...],
) -> CollectionRegistry:
    """Fill *registry* from every bracketed file under *root*, then freeze it.

    Files are loaded concurrently and registered in sorted path order so
    the first-wins conflict rule is deterministic.  Template and query
    errors are reported per file and do not stop the scan.
    """
    if not root.is_dir():
        registry.freeze()
        return registry
    files = await anyio.to_thread.run_sync(find_collection_files, root, extensions)
    loaded: dict[str, CollectionTemplate | None] = {}

    async def load(relative_path: str) -> None:
        try:
            loaded[relative_path] = await load_collection_template(root, relative_path)
        except (TemplateSyntaxError, QueryShapeError) as exc:
            reporter.error(exc)
            loaded[relative_path] = None

    async with anyio.create_task_group() as tg:
        for relative_path in files:
            tg.start_soon(load, relative_path)

    for relative_path in sorted(loaded):
        entry = loaded[relative_path]
        if entry is None:
            continue
        try:
            registry.register(entry)
        except CollectionConflictError as exc:
            reporter.error(exc)
            continue
        logger.debug("Registered %s -> %s", entry.collection_name, relative_path)

    registry.freeze()
    return registry
