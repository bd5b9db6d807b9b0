"""Revalidating cache for rendered page payloads.

Pages are regenerated on a thread pool. A page younger than its revalidate
window is served from memory; an older one is served stale while a single
background refresh runs. Concurrent requests for a page that is not cached
yet share one load.
"""
from __future__ import annotations

import asyncio
import logging
import threading
import time
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    stored_at: float


class PageCache:
    """In-memory page cache keyed by page path."""

    def __init__(self, executor: Executor, clock: Callable[[], float] = time.monotonic):
        self._executor = executor
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: Dict[str, _Entry] = {}
        self._inflight: Dict[str, Future] = {}

    async def get(self, key: str, loader: Callable[[], Any], revalidate: Optional[float]) -> Any:
        """Return the page for ``key``, calling ``loader`` when it must be built.

        ``revalidate`` is the freshness window in seconds. ``None`` or ``0``
        means the page is never stored; concurrent requests still share one
        load. Errors raised by ``loader`` reach every waiting caller and are
        never cached, and neither is a ``None`` result.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if not revalidate or self._clock() - entry.stored_at >= revalidate:
                    self._submit(key, loader, revalidate)
                return entry.value
            future = self._submit(key, loader, revalidate)
        return await asyncio.wrap_future(future)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _submit(self, key: str, loader: Callable[[], Any], revalidate: Optional[float]) -> Future:
        # Caller holds the lock.
        future = self._inflight.get(key)
        if future is None:
            future = self._executor.submit(loader)
            self._inflight[key] = future
            future.add_done_callback(lambda f: self._settle(key, revalidate, f))
        return future

    def _settle(self, key: str, revalidate: Optional[float], future: Future) -> None:
        with self._lock:
            if self._inflight.get(key) is future:
                del self._inflight[key]
            if future.cancelled():
                return
            exc = future.exception()
            if exc is not None:
                if key in self._entries:
                    logger.warning("Keeping stale page %s, refresh failed: %s", key, exc)
                return
            value = future.result()
            if value is None:
                # Missing pages are never stored.
                self._entries.pop(key, None)
            elif revalidate:
                self._entries[key] = _Entry(value, self._clock())
