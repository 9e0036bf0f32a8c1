"""Process-lifetime cache of parsed taxonomy sources with single-flight loads."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from skill_tree.entities.taxonomy import TaxonomyEntry

logger = logging.getLogger(__name__)


class TaxonomyCache:
    """Memoizes parsed taxonomy entries by source name.

    Each source key gets its own lock, so concurrent requests for the same
    uncached source wait on a single load-and-parse while loads of other
    sources proceed. Failed loads are not cached.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[TaxonomyEntry, ...]] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()
        self._loads = 0
        self._hits = 0

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get_or_load(
        self,
        key: str,
        loader: Callable[[], list[TaxonomyEntry]],
    ) -> tuple[TaxonomyEntry, ...]:
        """Return cached entries for ``key``, running ``loader`` at most once.

        Args:
            key: Source name.
            loader: Zero-argument callable producing the parsed entries.

        Returns:
            Tuple of entries for the source.
        """
        cached = self._entries.get(key)
        if cached is not None:
            self._record_hit()
            logger.debug("Taxonomy cache hit for %s", key)
            return cached

        with self._lock_for(key):
            # Another thread may have finished the load while we waited
            cached = self._entries.get(key)
            if cached is not None:
                self._record_hit()
                return cached

            entries = tuple(loader())
            self._loads += 1
            self._entries[key] = entries
            logger.info("Loaded taxonomy source %s (%d entries)", key, len(entries))
            return entries

    def _record_hit(self) -> None:
        with self._guard:
            self._hits += 1

    def invalidate(self, key: str | None = None) -> None:
        """Drop one source, or everything when ``key`` is None.

        Waits for any in-flight load of the dropped source(s), so a load that
        started before the call never repopulates the cache after it.
        """
        if key is None:
            with self._guard:
                keys = list(self._key_locks)
        else:
            keys = [key]
        for k in keys:
            with self._lock_for(k):
                self._entries.pop(k, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def cache_info(self) -> dict[str, int]:
        """Return cache statistics (loads, hits, size)."""
        return {
            "loads": self._loads,
            "hits": self._hits,
            "size": len(self._entries),
        }
