"""Tests for TaxonomyCache single-flight loading."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from skill_tree.entities.taxonomy import TaxonomyEntry
from skill_tree.memory.taxonomy_cache import TaxonomyCache

if TYPE_CHECKING:
    from collections.abc import Callable


def _counting_loader(counter: list[int], delay: float = 0.0) -> Callable[[], list[TaxonomyEntry]]:
    def loader() -> list[TaxonomyEntry]:
        counter.append(1)
        if delay:
            time.sleep(delay)
        return [TaxonomyEntry(key="go", display_name="Go", category="language")]

    return loader


class TestGetOrLoad:
    def test_loads_once(self) -> None:
        cache = TaxonomyCache()
        calls: list[int] = []
        first = cache.get_or_load("languages", _counting_loader(calls))
        second = cache.get_or_load("languages", _counting_loader(calls))

        assert first is second
        assert len(calls) == 1
        assert cache.cache_info == {"loads": 1, "hits": 1, "size": 1}
        assert "languages" in cache

    def test_concurrent_requests_share_one_load(self) -> None:
        cache = TaxonomyCache()
        calls: list[int] = []
        loader = _counting_loader(calls, delay=0.05)
        barrier = threading.Barrier(8)

        def request() -> tuple[TaxonomyEntry, ...]:
            barrier.wait()
            return cache.get_or_load("web", loader)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: request(), range(8)))

        assert len(calls) == 1
        assert all(r is results[0] for r in results)

    def test_failed_load_not_cached(self) -> None:
        cache = TaxonomyCache()

        def broken() -> list[TaxonomyEntry]:
            msg = "network down"
            raise OSError(msg)

        with pytest.raises(OSError, match="network down"):
            cache.get_or_load("web", broken)
        assert "web" not in cache

        calls: list[int] = []
        entries = cache.get_or_load("web", _counting_loader(calls))
        assert len(entries) == 1


class TestInvalidate:
    def test_single_key(self) -> None:
        cache = TaxonomyCache()
        calls: list[int] = []
        cache.get_or_load("a", _counting_loader(calls))
        cache.get_or_load("b", _counting_loader(calls))

        cache.invalidate("a")
        assert "a" not in cache
        assert "b" in cache

    def test_everything(self) -> None:
        cache = TaxonomyCache()
        calls: list[int] = []
        cache.get_or_load("a", _counting_loader(calls))
        cache.invalidate()
        assert cache.cache_info["size"] == 0

        cache.get_or_load("a", _counting_loader(calls))
        assert len(calls) == 2

    def test_waits_for_in_flight_load(self) -> None:
        cache = TaxonomyCache()
        started = threading.Event()
        release = threading.Event()

        def slow_loader() -> list[TaxonomyEntry]:
            started.set()
            release.wait(timeout=5)
            return [TaxonomyEntry(key="go", display_name="Go", category="language")]

        loading = threading.Thread(target=cache.get_or_load, args=("web", slow_loader))
        loading.start()
        assert started.wait(timeout=5)

        invalidating = threading.Thread(target=cache.invalidate, args=("web",))
        invalidating.start()
        invalidating.join(timeout=0.05)
        assert invalidating.is_alive()

        release.set()
        loading.join(timeout=5)
        invalidating.join(timeout=5)

        assert not invalidating.is_alive()
        assert "web" not in cache
