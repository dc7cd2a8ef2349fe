"""Page creator session.

One session owns one collection registry, one known-file set, and one
watch stream.  Lifecycle::

    check_config()                      # fatal ConfigurationError
    ├─ scan_collections()  ┐ concurrent, disjoint state
    └─ initial_scan()      ┘
    ready                               # task_status.started()
    apply(event) ...                    # until the watch stream ends

Usage::

    session = PageCreatorSession(PageCreatorConfig(path="src/pages"), PageStore())
    async with anyio.create_task_group() as tg:
        await tg.start(session.run)   # returns once the pages are ready
        ...
"""

import logging
from collections.abc import AsyncIterable

import anyio
from anyio.abc import TaskStatus

from wren.collection.derive import NodeResolver
from wren.collection.fields import PathField, path_field
from wren.collection.registry import CollectionRegistry, scan_collections
from wren.config import PageCreatorConfig
from wren.diagnostics import DiagnosticsSink, Reporter
from wren.errors import ConfigurationError
from wren.pages.creator import PageCreator
from wren.pages.sync import PageSyncEngine
from wren.pages.types import PageActions, QueryRunner
from wren.watch import DirectoryWatcher, WatchEvent, WatchSource

logger = logging.getLogger("wren.pages")


class PageCreatorSession:
    """Initial scan, collection discovery, then live reconciliation."""

    def __init__(
        self,
        config: PageCreatorConfig,
        actions: PageActions,
        *,
        query_runner: QueryRunner | None = None,
        get_node: NodeResolver | None = None,
        reporter: DiagnosticsSink | None = None,
        watch_source: WatchSource | AsyncIterable[WatchEvent] | None = None,
    ) -> None:
        self.config = config
        self.actions = actions
        self.reporter = reporter or Reporter()
        self.registry = CollectionRegistry()
        self._get_node = get_node
        self._watch_source = watch_source
        self.creator = PageCreator(
            config,
            actions,
            self.reporter,
            query_runner=query_runner,
            get_node=get_node,
        )
        self.engine = PageSyncEngine(self.creator, actions, self.reporter, config.extensions)
        self.ready = False

    def check_config(self) -> None:
        """Raise :class:`ConfigurationError` for a missing root.

        The error is reported as a panic before it is raised.
        """
        msg = None
        if not str(self.config.path):
            msg = '"path" is a required option for the page creator'
        elif self.config.path_check and not self.config.root.is_dir():
            msg = (
                "The path passed to the page creator does not exist on your "
                f"file system:\n\n{self.config.path}\n\n"
                "Please pick a path to an existing directory."
            )
        if msg is not None:
            error = ConfigurationError(msg)
            self.reporter.panic(error)
            raise error

    async def start(self) -> None:
        """Run both startup scans to completion.

        The collection scan and the initial page scan touch disjoint
        state and run concurrently.  Calling it again once ready is a
        no-op.
        """
        if self.ready:
            return
        self.check_config()
        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(
                    scan_collections,
                    self.config.root,
                    self.registry,
                    self.reporter,
                    self.config.extensions,
                )
                tg.start_soon(self.engine.initial_scan)
        except ExceptionGroup as group:
            # Surface a single scan failure as itself
            if len(group.exceptions) == 1:
                raise group.exceptions[0] from None
            raise
        self.ready = True
        logger.info(
            "Pages ready: %d files, %d collections",
            len(self.engine.known_files),
            len(self.registry),
        )

    async def run(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        """Start, report ready, then apply watch events until the stream ends.

        Raises:
            ConfigurationError: Before scanning, for a missing root.
            ReconciliationError: When an event cannot be applied.
        """
        await self.start()
        task_status.started()
        await self.engine.run(self._events())

    def _events(self) -> AsyncIterable[WatchEvent]:
        source = self._watch_source
        if source is None:
            source = self._watch_source = DirectoryWatcher(self.config.root)
        if isinstance(source, WatchSource):
            return source.stream()
        return source

    def path_field(self, type_name: str) -> PathField | None:
        """Resolver for *type_name*'s ``path`` field, if it has a collection."""
        return path_field(self.registry, type_name, self._get_node, self.config.extensions)
