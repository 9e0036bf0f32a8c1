"""Merged, addressable catalog of taxonomy entries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from skill_tree.entities.taxonomy import TaxonomyEntry

logger = logging.getLogger(__name__)


class TaxonomyCatalog:
    """Mapping from entry key to TaxonomyEntry across one or more sources.

    Identical keys contributed by different sources are merged: the
    last-loaded entry wins for metadata and the keyword sets are unioned.
    """

    def __init__(self, entries: Iterable[TaxonomyEntry] = ()) -> None:
        self._entries: dict[str, TaxonomyEntry] = {}
        self._sources: dict[str, list[str]] = {}  # key -> contributing sources
        self.add_many(entries)

    @classmethod
    def merge(
        cls, partitions: Iterable[tuple[str, Iterable[TaxonomyEntry]]]
    ) -> TaxonomyCatalog:
        """Merge named partitions in order, later partitions winning."""
        catalog = cls()
        for source_name, entries in partitions:
            catalog.add_many(entries, source_name=source_name)
        return catalog

    def add(self, entry: TaxonomyEntry, source_name: str | None = None) -> None:
        """Insert an entry, merging with any existing entry of the same key."""
        source = source_name or entry.source
        existing = self._entries.get(entry.key)
        if existing is not None:
            merged_keywords = existing.keywords | entry.keywords
            entry = entry.model_copy(update={"keywords": merged_keywords})
            logger.debug(
                "Merged taxonomy key %s (%s over %s)",
                entry.key,
                source or "?",
                existing.source or "?",
            )
        self._entries[entry.key] = entry
        contributors = self._sources.setdefault(entry.key, [])
        if source and source not in contributors:
            contributors.append(source)

    def add_many(
        self, entries: Iterable[TaxonomyEntry], source_name: str | None = None
    ) -> None:
        for entry in entries:
            self.add(entry, source_name=source_name)

    def get(self, key: str) -> TaxonomyEntry | None:
        return self._entries.get(key)

    def sources_of(self, key: str) -> list[str]:
        """Return the sources that contributed to ``key``, in load order."""
        return list(self._sources.get(key, []))

    @property
    def source_names(self) -> list[str]:
        names: list[str] = []
        for contributors in self._sources.values():
            for name in contributors:
                if name not in names:
                    names.append(name)
        return names

    def entries(self) -> list[TaxonomyEntry]:
        """All entries in insertion order."""
        return list(self._entries.values())

    def by_category(self, category: str) -> list[TaxonomyEntry]:
        return [e for e in self._entries.values() if e.category == category]

    def categories(self) -> list[str]:
        seen: list[str] = []
        for entry in self._entries.values():
            if entry.category not in seen:
                seen.append(entry.category)
        return seen

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[TaxonomyEntry]:
        return iter(list(self._entries.values()))
