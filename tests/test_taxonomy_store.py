"""Tests for TaxonomyCatalog merging and TaxonomyStore source selection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from skill_tree.config import TaxonomyConfig
from skill_tree.entities.signals import RepoSignal
from skill_tree.entities.taxonomy import TaxonomyEntry
from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog
from skill_tree.memory.taxonomy_store import TaxonomySource, TaxonomyStore


@dataclass
class StaticSource:
    """In-memory taxonomy source counting its loads."""

    name: str
    payload: Any
    loads: int = field(default=0)

    def load(self) -> Any:
        self.loads += 1
        return self.payload


def _curated(*entries: dict[str, Any]) -> dict[str, Any]:
    return {"entries": list(entries)}


@pytest.fixture
def selection_config() -> TaxonomyConfig:
    return TaxonomyConfig(
        always_load=("base",),
        triggers={"web": ("javascript", "react"), "data": ("pandas",)},
    )


@pytest.fixture
def selection_store(selection_config: TaxonomyConfig) -> TaxonomyStore:
    empty = _curated()
    return TaxonomyStore(
        [
            StaticSource("web", empty),
            StaticSource("base", empty),
            StaticSource("data", empty),
            StaticSource("custom", empty),
        ],
        config=selection_config,
    )


class TestCatalogMerge:
    def test_last_wins_keywords_unioned(self, entry_factory: Callable[..., TaxonomyEntry]) -> None:
        first = entry_factory("react", "React", "framework", ["react"], source="a")
        second = entry_factory("react", "React.js", "frontend", ["reactjs"], source="b")

        catalog = TaxonomyCatalog.merge([("a", [first]), ("b", [second])])
        merged = catalog.get("react")

        assert merged is not None
        assert merged.display_name == "React.js"
        assert merged.category == "frontend"
        assert merged.keywords == frozenset({"react", "reactjs"})
        assert catalog.sources_of("react") == ["a", "b"]
        assert len(catalog) == 1

    def test_insertion_order_and_categories(self, web_catalog: TaxonomyCatalog) -> None:
        keys = [e.key for e in web_catalog]
        assert keys[0] == "javascript"
        assert web_catalog.categories()[:2] == ["language", "framework"]
        assert {e.key for e in web_catalog.by_category("framework")} == {"react", "redux"}
        assert "redux" in web_catalog
        assert web_catalog.get("missing") is None


class TestStoreLoad:
    def test_static_source_satisfies_protocol(self) -> None:
        assert isinstance(StaticSource("x", {}), TaxonomySource)

    def test_later_source_wins(self) -> None:
        a = StaticSource("a", _curated({"key": "vue", "name": "Vue", "category": "framework", "keywords": ["vue"]}))
        b = StaticSource("b", _curated({"key": "vue", "name": "Vue.js", "category": "framework", "keywords": ["nuxt"]}))
        store = TaxonomyStore([a, b])

        catalog = store.load(["a", "b"])
        vue = catalog.get("vue")
        assert vue is not None
        assert vue.display_name == "Vue.js"
        assert vue.keywords == frozenset({"vue", "nuxt"})

        reversed_catalog = store.load(["b", "a"])
        assert reversed_catalog.get("vue").display_name == "Vue"  # type: ignore[union-attr]

    def test_each_source_parsed_once(self) -> None:
        source = StaticSource("a", _curated({"key": "go", "name": "Go", "category": "language"}))
        store = TaxonomyStore([source])

        store.load()
        store.load(["a"])

        assert source.loads == 1
        assert store.cache.cache_info["hits"] == 1

    def test_duplicate_names_requested_once(self) -> None:
        source = StaticSource("a", _curated({"key": "go", "name": "Go", "category": "language"}))
        store = TaxonomyStore([source])
        assert len(store.load(["a", "a"])) == 1

    def test_unknown_source(self) -> None:
        store = TaxonomyStore()
        with pytest.raises(KeyError, match="nope"):
            store.load(["nope"])

    def test_failed_source_retried(self) -> None:
        class Flaky:
            name = "flaky"
            attempts = 0

            def load(self) -> Any:
                self.attempts += 1
                if self.attempts == 1:
                    msg = "temporary"
                    raise OSError(msg)
                return _curated({"key": "go", "name": "Go", "category": "language"})

        store = TaxonomyStore([Flaky()])
        with pytest.raises(OSError, match="temporary"):
            store.load()
        assert len(store.load()) == 1

    def test_register_replaces_and_invalidates(self) -> None:
        store = TaxonomyStore([StaticSource("a", _curated({"key": "go", "name": "Go"}))])
        store.load()

        store.register(StaticSource("a", _curated({"key": "rust", "name": "Rust"})))
        catalog = store.load()

        assert "rust" in catalog
        assert "go" not in catalog
        assert store.source_names() == ["a"]

    def test_default_store_has_bundled_sources(self) -> None:
        store = TaxonomyStore.default()
        assert {"languages", "meta", "web"} <= set(store.source_names())
        assert store.load(["languages"]).get("python") is not None


class TestSelectSources:
    def test_always_load_first(self, selection_store: TaxonomyStore) -> None:
        selected = selection_store.select_sources(RepoSignal())
        assert selected[0] == "base"

    def test_untriggered_sources_always_selected(self, selection_store: TaxonomyStore) -> None:
        assert "custom" in selection_store.select_sources(RepoSignal())

    def test_language_trigger(self, selection_store: TaxonomyStore) -> None:
        signal = RepoSignal(language_bytes={"JavaScript": 100})
        selected = selection_store.select_sources(signal)
        assert "web" in selected
        assert "data" not in selected

    def test_text_trigger_matches_whole_words(self, selection_store: TaxonomyStore) -> None:
        assert "data" in selection_store.select_sources(RepoSignal(search_text="pandas notebooks"))
        assert "data" not in selection_store.select_sources(RepoSignal(search_text="pandasql"))

    def test_load_for_signal(self, selection_store: TaxonomyStore) -> None:
        catalog = selection_store.load_for_signal(RepoSignal(search_text="react app"))
        assert set(catalog.source_names) <= {"base", "web", "custom"}
