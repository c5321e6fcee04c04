from __future__ import annotations

import asyncio
import logging
import os
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from triproute.app.ports.output import IFeedCache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MemoryFeedCache(IFeedCache):
    """In-process cache for parsed feed tables.

    Env vars:
      - FEED_CACHE_TTL_S: entry lifetime in seconds (unset or 0 = no expiry)
      - FEED_CACHE_MAX_ENTRIES: LRU bound (unset or 0 = unbounded)

    Concurrent first loads of one key share a lock, so the loader runs once.
    """

    ttl_s: float | None = None
    max_entries: int | None = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    _store: "OrderedDict[str, tuple[Any, float]]" = field(
        default_factory=OrderedDict, init=False, repr=False
    )
    _locks: dict[str, asyncio.Lock] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.ttl_s is None and os.getenv("FEED_CACHE_TTL_S"):
            self.ttl_s = float(os.environ["FEED_CACHE_TTL_S"])
        if self.max_entries is None and os.getenv("FEED_CACHE_MAX_ENTRIES"):
            self.max_entries = int(os.environ["FEED_CACHE_MAX_ENTRIES"])

    def _drop_lock(self, key: str) -> None:
        # A held lock stays until its load finishes and stores the entry.
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def _lookup(self, key: str) -> tuple[bool, Any]:
        entry = self._store.get(key)
        if entry is None:
            return False, None

        value, stored_at = entry
        if self.ttl_s and (self.clock() - stored_at) >= self.ttl_s:
            del self._store[key]
            logger.debug("Feed cache entry expired", extra={"key": key})
            return False, None

        self._store.move_to_end(key)
        return True, value

    def _put(self, key: str, value: Any) -> None:
        self._store[key] = (value, self.clock())
        self._store.move_to_end(key)
        while self.max_entries and len(self._store) > self.max_entries:
            evicted, _ = self._store.popitem(last=False)
            self._drop_lock(evicted)
            logger.debug("Feed cache evicted entry", extra={"key": evicted})

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        hit, value = self._lookup(key)
        if hit:
            return value

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another task may have filled the entry while we waited.
            hit, value = self._lookup(key)
            if hit:
                return value

            value = await loader()
            self._put(key, value)
            return value

    def invalidate(self, key: str) -> bool:
        found = self._store.pop(key, None) is not None
        self._drop_lock(key)
        return found

    def clear(self) -> int:
        count = len(self._store)
        self._store.clear()
        self._locks.clear()
        return count

    def size(self) -> int:
        return len(self._store)
