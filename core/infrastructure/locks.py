"""
Per-key mutual exclusion.

Views bridge into async handlers with ``async_to_sync``, so concurrent
requests may run on different event loops in different threads. An
``asyncio.Lock`` is bound to one loop, so the keyed lock is built on
``threading.Lock`` and blocking waits are pushed to a worker thread
with ``sync_to_async``. The event loop itself never blocks.
"""

import logging
import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from asgiref.sync import sync_to_async

logger = logging.getLogger(__name__)


class _LockEntry:
    """A lock plus the number of callers holding or waiting for it."""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class KeyedLock:
    """
    Mutex map keyed by an arbitrary string.

    Entries are reference counted and dropped once nobody holds or
    waits for them, so the map only grows with in-flight keys.
    """

    def __init__(self, name: str = "keyed-lock"):
        """
        Initialize the lock map.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self._guard = threading.Lock()
        self._entries: Dict[str, _LockEntry] = {}

    def _checkout(self, key: str) -> _LockEntry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _LockEntry()
                self._entries[key] = entry
            entry.users += 1
            return entry

    def _checkin(self, key: str, entry: _LockEntry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for ``key`` for the duration of the block.

        Args:
            key: Lock key (order id, license key, ...)
        """
        entry = self._checkout(key)
        try:
            if not entry.lock.acquire(blocking=False):
                logger.debug("%s: waiting for %s", self.name, key)
                await sync_to_async(entry.lock.acquire, thread_sensitive=False)()
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(key, entry)

    def active_keys(self) -> int:
        """Number of keys currently held or awaited."""
        with self._guard:
            return len(self._entries)
