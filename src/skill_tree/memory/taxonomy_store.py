"""Taxonomy store: named sources, cached loading, relevance filtering."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from skill_tree.config import TAXONOMY_CONFIG, TaxonomyConfig
from skill_tree.memory.taxonomy_cache import TaxonomyCache
from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skill_tree.entities.signals import RepoSignal
    from skill_tree.entities.taxonomy import TaxonomyEntry

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9+#.-]+")


@runtime_checkable
class TaxonomySource(Protocol):
    """Protocol for anything that can produce a raw taxonomy payload."""

    @property
    def name(self) -> str: ...

    def load(self) -> Any: ...


class TaxonomyStore:
    """Registry of named taxonomy sources backed by a TaxonomyCache.

    Sources are loaded on demand; each distinct source is parsed at most
    once per cache and merged into a catalog in the requested order.
    """

    def __init__(
        self,
        sources: Iterable[TaxonomySource] = (),
        cache: TaxonomyCache | None = None,
        config: TaxonomyConfig = TAXONOMY_CONFIG,
    ) -> None:
        self._sources: dict[str, TaxonomySource] = {}
        self._cache = cache or TaxonomyCache()
        self._config = config
        for source in sources:
            self.register(source)

    @classmethod
    def default(cls, cache: TaxonomyCache | None = None) -> TaxonomyStore:
        """Store pre-registered with every bundled taxonomy source."""
        from skill_tree.nodes.ingestion.taxonomy_sources import (
            PackagedSource,
            bundled_source_names,
        )

        sources = [PackagedSource(name) for name in bundled_source_names()]
        return cls(sources, cache=cache)

    @property
    def cache(self) -> TaxonomyCache:
        return self._cache

    def register(self, source: TaxonomySource) -> None:
        """Register a source, replacing any previous source with the same name."""
        if source.name in self._sources:
            logger.info("Replacing taxonomy source %s", source.name)
            self._cache.invalidate(source.name)
        self._sources[source.name] = source

    def source_names(self) -> list[str]:
        return list(self._sources)

    def _load_entries(self, name: str) -> tuple[TaxonomyEntry, ...]:
        source = self._sources.get(name)
        if source is None:
            msg = f"Unknown taxonomy source: {name}"
            raise KeyError(msg)

        def _load_and_parse() -> list[TaxonomyEntry]:
            from skill_tree.nodes.ingestion.taxonomy_parser import (
                parse_taxonomy_payload,
            )

            try:
                payload = source.load()
            except Exception:
                logger.exception("Failed to load taxonomy source %s", name)
                raise
            return parse_taxonomy_payload(payload, source_name=name)

        return self._cache.get_or_load(name, _load_and_parse)

    def load(self, names: Iterable[str] | None = None) -> TaxonomyCatalog:
        """Load and merge the named sources (all registered when None).

        Later names win for metadata on duplicate keys.
        """
        requested = list(self._sources) if names is None else list(dict.fromkeys(names))
        return TaxonomyCatalog.merge(
            (name, self._load_entries(name)) for name in requested
        )

    def select_sources(self, signal: RepoSignal) -> list[str]:
        """Pick the registered sources relevant to ``signal``.

        Always-on sources come first, then any source whose trigger terms
        match a language name exactly or a word of the search text.
        """
        languages = {lang.lower() for lang in signal.language_bytes}
        words = set(_TOKEN_RE.findall(signal.search_text.lower()))

        selected = [n for n in self._config.always_load if n in self._sources]
        for name in self._sources:
            if name in selected:
                continue
            triggers = self._config.triggers.get(name)
            if triggers is None:
                # Sources without triggers (e.g. user supplied) are always relevant
                selected.append(name)
                continue
            if any(t in languages or t in words for t in triggers):
                selected.append(name)
        logger.debug("Selected taxonomy sources %s", selected)
        return selected

    def load_for_signal(self, signal: RepoSignal) -> TaxonomyCatalog:
        """Load only the sources relevant to ``signal``."""
        return self.load(self.select_sources(signal))
