"""File watching — add/remove events for the pages root.

The sync engine consumes any async iterable of :class:`WatchEvent`.
:class:`DirectoryWatcher` is the default source, backed by a ``watchdog``
observer.  The observer runs on its own thread and hands events over a
thread-safe queue; the async side drains the queue from a worker thread
so the event loop is never blocked.

A modified file is not reported: page identity depends on the path only.
A move is reported as a removal of the old path followed by an addition
of the new one.  Directory events carry ``directory=True``: watchdog may
send a single event for a whole subtree, and the consumer expands it.
"""

import logging
import queue
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

import anyio
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger("wren.watch")


class WatchKind(Enum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """One add or remove, with *path* relative to the watched root."""

    kind: WatchKind
    path: str
    directory: bool = False


@runtime_checkable
class WatchSource(Protocol):
    """A source of watch events. Started once, never restarted."""

    def stream(self) -> AsyncIterator[WatchEvent]: ...


class _QueueHandler(FileSystemEventHandler):
    """Translates watchdog callbacks into :class:`WatchEvent` items."""

    def __init__(self, root: Path, events: "queue.Queue[WatchEvent | None]") -> None:
        self._root = root
        self._events = events

    def _relative(self, path: str | bytes) -> str | None:
        if isinstance(path, bytes):
            path = path.decode()
        try:
            return Path(path).resolve().relative_to(self._root).as_posix()
        except ValueError:
            return None

    def _put(self, kind: WatchKind, path: str | bytes, directory: bool) -> None:
        relative = self._relative(path)
        # the root itself is never a page directory event
        if relative is not None and relative != ".":
            self._events.put(WatchEvent(kind, relative, directory))

    def on_created(self, event: FileSystemEvent) -> None:
        self._put(WatchKind.ADDED, event.src_path, event.is_directory)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._put(WatchKind.REMOVED, event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._put(WatchKind.REMOVED, event.src_path, event.is_directory)
        self._put(WatchKind.ADDED, event.dest_path, event.is_directory)


class DirectoryWatcher:
    """Watch a directory tree with ``watchdog``.

    Usage::

        watcher = DirectoryWatcher("src/pages")
        async for event in watcher.stream():
            ...
        watcher.close()  # from anywhere; ends the stream

    Free-threading safety:
        - The observer thread only touches the queue (thread-safe)
        - ``close()`` enqueues a sentinel, the stream exits on it
    """

    __slots__ = ("_events", "_observer", "_root", "_started")

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()
        self._events: queue.Queue[WatchEvent | None] = queue.Queue()
        self._observer: Observer | None = None
        self._started = False

    async def stream(self) -> AsyncIterator[WatchEvent]:
        if self._started:
            msg = "DirectoryWatcher.stream() can only be started once"
            raise RuntimeError(msg)
        self._started = True

        observer = Observer()
        observer.schedule(_QueueHandler(self._root, self._events), str(self._root), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching %s", self._root)
        try:
            while True:
                event = await anyio.to_thread.run_sync(self._events.get, abandon_on_cancel=True)
                if event is None:
                    break
                yield event
        finally:
            observer.stop()
            await anyio.to_thread.run_sync(observer.join)

    def close(self) -> None:
        """Signal the stream to stop."""
        self._events.put(None)
