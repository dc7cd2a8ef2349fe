"""Incremental page reconciliation.

:class:`PageSyncEngine` keeps the generated page set equal to a function
of the files under the pages root.  It runs one full scan at startup and
afterwards applies watch events one at a time:

- ``added``: create pages unless the path is already known (duplicate
  adds are no-ops);
- ``removed``: delete every page owned by the path, then forget it
  (removing an unknown path is a no-op).

A changed file is seen as a removal followed by an addition.  There is no
in-place update.  A directory event stands for every page file beneath
it: a removal drops each known path under the directory, an addition
walks it.  Paths inside skipped directories are ignored exactly as the
initial scan ignores them.

Thread safety:
    The known-file set is mutated only by the task consuming events.
    Nothing else reads or writes it, so no lock is needed.
"""

import logging
from collections.abc import AsyncIterable

import anyio

from wren.diagnostics import DiagnosticsSink
from wren.errors import ReconciliationError
from wren.pages.creator import PageCreator
from wren.pages.discovery import find_page_files, is_page_file
from wren.pages.types import PageActions
from wren.watch import WatchEvent, WatchKind

logger = logging.getLogger("wren.pages")


class PageSyncEngine:
    """Reconciles the page registry with the pages root.

    After any event fails the engine is closed: the failure is reported
    as a panic, raised as :class:`ReconciliationError`, and every later
    event is refused.
    """

    __slots__ = ("_actions", "_closed", "_creator", "_extensions", "_known", "_reporter")

    def __init__(
        self,
        creator: PageCreator,
        actions: PageActions,
        reporter: DiagnosticsSink,
        extensions: tuple[str, ...],
    ) -> None:
        self._creator = creator
        self._actions = actions
        self._reporter = reporter
        self._extensions = extensions
        self._known: set[str] = set()
        self._closed = False

    @property
    def known_files(self) -> frozenset[str]:
        return frozenset(self._known)

    @property
    def closed(self) -> bool:
        return self._closed

    async def initial_scan(self) -> int:
        """Create pages for every matching file under the root.

        Returns the number of files processed.
        """
        root = self._creator.root
        if not root.is_dir():
            logger.warning("Pages directory %s does not exist; nothing to scan", root)
            return 0
        files = await anyio.to_thread.run_sync(find_page_files, root, self._extensions)
        for relative_path in files:
            await self._guarded(relative_path, self.on_file_added)
        logger.info("Initial scan created pages for %d files under %s", len(files), root)
        return len(files)

    async def on_file_added(self, relative_path: str) -> None:
        if relative_path in self._known:
            return
        await self._creator.create_pages(relative_path)
        self._known.add(relative_path)

    async def on_file_removed(self, relative_path: str) -> None:
        component = self._creator.component_path(relative_path)
        for page in self._actions.pages():
            if page.component == component:
                self._actions.delete_page(page.route, page.component)
        self._known.discard(relative_path)

    async def apply(self, event: WatchEvent) -> None:
        """Apply one watch event.

        Raises:
            ReconciliationError: The event could not be applied, or the
                engine was closed by an earlier failure.
        """
        if event.directory:
            for relative_path in await self._expand_directory(event):
                await self._apply_file(event.kind, relative_path)
        elif is_page_file(event.path, self._extensions):
            await self._apply_file(event.kind, event.path)

    async def _apply_file(self, kind: WatchKind, relative_path: str) -> None:
        if kind is WatchKind.ADDED:
            await self._guarded(relative_path, self.on_file_added)
        else:
            await self._guarded(relative_path, self.on_file_removed)

    async def _expand_directory(self, event: WatchEvent) -> list[str]:
        prefix = event.path.rstrip("/") + "/"
        if event.kind is WatchKind.REMOVED:
            return sorted(p for p in self._known if p.startswith(prefix))
        directory = self._creator.root / event.path
        if not directory.is_dir():
            return []
        files = await anyio.to_thread.run_sync(find_page_files, directory, self._extensions)
        return [prefix + p for p in files if is_page_file(prefix + p, self._extensions)]

    async def run(self, events: AsyncIterable[WatchEvent]) -> None:
        """Apply *events* in delivery order until the stream ends."""
        async for event in events:
            await self.apply(event)

    async def _guarded(self, relative_path: str, handler) -> None:
        if self._closed:
            raise ReconciliationError(
                relative_path, RuntimeError("page sync stopped after an earlier failure")
            )
        try:
            await handler(relative_path)
        except Exception as exc:
            self._closed = True
            error = ReconciliationError(relative_path, exc)
            self._reporter.panic(error)
            raise error from exc
