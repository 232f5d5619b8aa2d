"""
Host environment services: the clock that stamps each operation and the
keyed locks that serialize operations touching the same key space.
"""

import asyncio
import time
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Hashable, Protocol


class Clock(Protocol):
    """Source of non-decreasing integer timestamps, read once per operation."""

    def now(self) -> int:
        ...


class LogicalClock:
    """
    Block-height style counter.

    Every reading advances the height by one, so each operation lands in its
    own block.
    """

    def __init__(self, start: int = 1):
        self._height = start - 1

    def now(self) -> int:
        self._height += 1
        return self._height

    @property
    def height(self) -> int:
        return self._height


class WallClock:
    """Unix seconds, clamped so a backwards system clock never shows."""

    def __init__(self, source: Callable[[], float] = time.time):
        self._source = source
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, int(self._source()))
        return self._last


def build_clock(mode: str) -> Clock:
    if mode == "logical":
        return LogicalClock()
    if mode == "wall":
        return WallClock()
    raise ValueError(f"Unknown clock mode: {mode}")


class KeyedLocks:
    """
    One asyncio.Lock per key.

    Locks are held in a weak-valued mapping; a key's lock disappears once no
    coroutine is holding or waiting on it.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._lock_for(key)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
