"""SkillTreePipeline coordinator with layout caching and latency monitoring."""

from __future__ import annotations

import functools
import logging
import time
from typing import TYPE_CHECKING

from skill_tree.config import LAYOUT_CONFIG, MATCHER_CONFIG, LayoutConfig, MatcherConfig
from skill_tree.entities.taxonomy import TaxonomyCategory
from skill_tree.memory.taxonomy_graph import TaxonomyGraph
from skill_tree.nodes.ingestion.signal_aggregator import aggregate_signal
from skill_tree.nodes.layout.radial import layout_skill_tree
from skill_tree.nodes.matching.skill_matcher import match_skills
from skill_tree.workflows.hierarchy_builder import build_hierarchy
from skill_tree.workflows.models import SkillTreeResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skill_tree.entities.layout import SkillLayout
    from skill_tree.entities.signals import RepoRecord, RepoSignal
    from skill_tree.entities.skills import DetectedSkill
    from skill_tree.memory.taxonomy_store import TaxonomyStore
    from skill_tree.nodes.matching.keyword_matchers import KeywordMatcher

logger = logging.getLogger(__name__)

DEFAULT_CENTER_LABEL = "Developer"
DEFAULT_CACHE_SIZE = 128


def pick_center_label(hierarchy: list[DetectedSkill], fallback: str) -> str:
    """Strongest meta skill's name, else ``fallback``."""
    meta = [s for s in hierarchy if s.category == TaxonomyCategory.META]
    if not meta:
        return fallback
    best = min(meta, key=lambda s: (-s.level, -s.repo_count, s.name))
    return best.name


class SkillTreePipeline:
    """Coordinates matching, hierarchy building and layout.

    Layouts are cached by their (hashable) skill tuple and center label;
    this is safe because layout is a pure function of its input.
    """

    def __init__(
        self,
        store: TaxonomyStore,
        keyword_matcher: KeywordMatcher | None = None,
        matcher_config: MatcherConfig = MATCHER_CONFIG,
        layout_config: LayoutConfig = LAYOUT_CONFIG,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        """Initialize the pipeline with a taxonomy store and configuration.

        Args:
            store: Taxonomy store providing catalogs.
            keyword_matcher: Optional keyword strategy (substring by default).
            matcher_config: Scoring thresholds.
            layout_config: Ring geometry.
            cache_size: LRU cache size for layouts.
        """
        self._store = store
        self._keyword_matcher = keyword_matcher
        self._matcher_config = matcher_config
        self._layout_config = layout_config
        self._layout_cached = functools.lru_cache(maxsize=cache_size)(self._layout_impl)

    def _layout_impl(
        self, skills: tuple[DetectedSkill, ...], center_label: str
    ) -> SkillLayout:
        return layout_skill_tree(list(skills), center_label, self._layout_config)

    def run(
        self,
        signal: RepoSignal,
        center_label: str = DEFAULT_CENTER_LABEL,
        sources: Iterable[str] | None = None,
    ) -> SkillTreeResult:
        """Infer skills from ``signal`` and lay them out.

        Args:
            signal: Aggregated repository signal.
            center_label: Center label used when no meta skill is detected.
            sources: Taxonomy sources to load; relevance-filtered when None.

        Returns:
            SkillTreeResult. An empty signal yields the single-node layout.

        Raises:
            TaxonomyCycleError: If the taxonomy contains a parent cycle on the
                chain of a detected skill.
        """
        start = time.perf_counter()

        source_names = (
            list(sources) if sources is not None else self._store.select_sources(signal)
        )
        catalog = self._store.load(source_names)

        detected = match_skills(
            signal, catalog, self._keyword_matcher, self._matcher_config
        )
        if not detected:
            logger.info("No skills detected, producing minimal profile")
            hierarchy: list[DetectedSkill] = []
        else:
            hierarchy = build_hierarchy(
                detected, catalog, TaxonomyGraph.from_catalog(catalog)
            )

        label = pick_center_label(hierarchy, center_label)

        info_before = self._layout_cached.cache_info()
        layout = self._layout_cached(tuple(hierarchy), label)
        cache_hit = self._layout_cached.cache_info().hits > info_before.hits

        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Skill tree for %s: %d skills, %d nodes in %.1fms",
            label,
            len(hierarchy),
            len(layout.nodes),
            latency_ms,
        )
        return SkillTreeResult(
            detected=detected,
            hierarchy=hierarchy,
            layout=layout,
            center_label=label,
            sources=source_names,
            latency_ms=latency_ms,
            cache_hit=cache_hit,
        )

    def run_for_repos(
        self,
        repos: Iterable[RepoRecord],
        center_label: str = DEFAULT_CENTER_LABEL,
        include_forks: bool = False,
        sources: Iterable[str] | None = None,
    ) -> SkillTreeResult:
        """Aggregate repository records, then run the pipeline."""
        signal = aggregate_signal(repos, include_forks=include_forks)
        return self.run(signal, center_label=center_label, sources=sources)

    def clear_cache(self) -> None:
        """Invalidate all cached layouts."""
        self._layout_cached.cache_clear()

    @property
    def cache_info(self) -> dict[str, int]:
        """Return layout cache statistics (hits, misses, size, maxsize)."""
        info = self._layout_cached.cache_info()
        return {
            "hits": info.hits,
            "misses": info.misses,
            "size": info.currsize,
            "maxsize": info.maxsize or 0,
        }
