"""Polling file watcher: content changes -> cache invalidation + full-reload signal"""

import logging
import threading
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from mdfolio.core.cache import ContentCache


logger = logging.getLogger(__name__)

ADDED, CHANGED, REMOVED = 'add', 'change', 'unlink'


class Change(NamedTuple):
    kind: str
    path: Path


Snapshot = dict[Path, tuple[int, int]]
ReloadListener = Callable[[list[Change]], None]


class ContentWatcher:
    """Watch a cache's content root and signal a full reload on any content file change.

    Every file ending in the content extension counts, hidden ones included,
    since hiding a file is itself a change to the tree. Listeners run after
    the cache has been invalidated.
    """

    def __init__(self, cache: ContentCache, interval: float = 0.5):
        self.cache = cache
        self.interval = interval
        self._listeners: list[ReloadListener] = []
        self.cache.root.mkdir(parents=True, exist_ok=True)
        self._snapshot = self.snapshot()

    def subscribe(self, listener: ReloadListener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> Snapshot:
        """Return {path: (mtime_ns, size)} for every content file under the root."""
        snap: Snapshot = {}
        for p in self.cache.root.rglob(f'*{self.cache.ext}'):
            try:
                st = p.stat()
            except FileNotFoundError:
                continue    # removed between listing and stat
            if p.is_file():
                snap[p] = (st.st_mtime_ns, st.st_size)
        return snap

    def poll(self) -> list[Change]:
        """Compare against the previous snapshot; on change invalidate the cache and notify."""
        current = self.snapshot()
        previous, self._snapshot = self._snapshot, current
        changes = [Change(ADDED, p) for p in current.keys() - previous.keys()]
        changes += [Change(REMOVED, p) for p in previous.keys() - current.keys()]
        changes += [Change(CHANGED, p) for p in current.keys() & previous.keys() if current[p] != previous[p]]
        if not changes:
            return []

        changes.sort(key=lambda c: str(c.path))
        for c in changes:
            logger.info("%s: %s", c.kind, c.path)
        self.cache.invalidate()
        for listener in self._listeners:
            listener(changes)
        return changes

    def run(self, stop: Optional[threading.Event] = None, max_polls: Optional[int] = None) -> None:
        """Poll until stop is set or max_polls polls have run."""
        stop = stop or threading.Event()
        polls = 0
        logger.info("Watching %s for *%s changes", self.cache.root, self.cache.ext)
        while not stop.is_set():
            self.poll()
            polls += 1
            if max_polls is not None and polls >= max_polls:
                break
            stop.wait(self.interval)
