"""Taxonomy-driven skill matching over an aggregated repository signal."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from skill_tree.config import MATCHER_CONFIG, MatcherConfig
from skill_tree.entities.skills import DetectedSkill
from skill_tree.entities.taxonomy import TaxonomyCategory
from skill_tree.nodes.matching.keyword_matchers import DEFAULT_KEYWORD_MATCHER
from skill_tree.nodes.matching.language_scorer import (
    parent_display_name,
    score_languages,
)

if TYPE_CHECKING:
    from skill_tree.entities.signals import RepoSignal
    from skill_tree.entities.taxonomy import TaxonomyEntry
    from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog
    from skill_tree.nodes.matching.keyword_matchers import KeywordMatcher

logger = logging.getLogger(__name__)

# Declared evaluation order for keyword scoring (languages are scored first)
KEYWORD_CATEGORY_ORDER: tuple[str, ...] = tuple(
    c.value for c in TaxonomyCategory if c is not TaxonomyCategory.LANGUAGE
)


def keyword_level(repo_count: int, config: MatcherConfig = MATCHER_CONFIG) -> int:
    """Level for a keyword match: ``min(5, ceil(repo_count / 1.5) + 1)``.

    A text match found in no individual repository (``repo_count == 0``)
    therefore floors at level 1.
    """
    level = math.ceil(repo_count / config.repo_count_divisor) + 1
    return max(config.min_level, min(config.max_level, level))


def category_order(catalog: TaxonomyCatalog) -> list[str]:
    """Non-language categories present in ``catalog``, in evaluation order.

    Declared categories come first; categories unknown to the declared order
    follow, sorted by name.
    """
    present = set(catalog.categories())
    present.discard(TaxonomyCategory.LANGUAGE.value)
    declared = [c for c in KEYWORD_CATEGORY_ORDER if c in present]
    extra = sorted(present - set(KEYWORD_CATEGORY_ORDER))
    return declared + extra


def count_matching_repos(
    entry: TaxonomyEntry,
    signal: RepoSignal,
    keyword_matcher: KeywordMatcher,
) -> int:
    """Number of repositories whose text or topics contain one of the keywords."""
    count = 0
    texts = signal.repo_texts
    topics_by_repo = signal.repo_topics
    # Either list may be absent; a signal can carry topics without texts
    for i in range(max(len(texts), len(topics_by_repo))):
        text = texts[i] if i < len(texts) else ""
        topics = topics_by_repo[i] if i < len(topics_by_repo) else frozenset()
        if entry.keywords & topics or keyword_matcher.matches(entry.keywords, text):
            count += 1
    return count


def score_keywords(
    signal: RepoSignal,
    catalog: TaxonomyCatalog,
    keyword_matcher: KeywordMatcher = DEFAULT_KEYWORD_MATCHER,
    config: MatcherConfig = MATCHER_CONFIG,
) -> list[DetectedSkill]:
    """Score every non-language entry whose keywords occur in the search text.

    Returns detections in evaluation order so callers can apply the
    later-overwrites-earlier rule.
    """
    text = signal.search_text.lower()
    if not text.strip():
        return []

    results: list[DetectedSkill] = []
    for category in category_order(catalog):
        for entry in catalog.by_category(category):
            if not keyword_matcher.matches(entry.keywords, text):
                continue
            repo_count = count_matching_repos(entry, signal, keyword_matcher)
            results.append(
                DetectedSkill(
                    name=entry.display_name,
                    key=entry.key,
                    category=entry.category,
                    level=keyword_level(repo_count, config),
                    parent_name=parent_display_name(entry, catalog),
                    repo_count=repo_count,
                    source_weight=entry.weight,
                )
            )
    return results


def match_skills(
    signal: RepoSignal,
    catalog: TaxonomyCatalog,
    keyword_matcher: KeywordMatcher | None = None,
    config: MatcherConfig = MATCHER_CONFIG,
) -> dict[str, DetectedSkill]:
    """Match a signal against the taxonomy.

    Languages are scored first, then every other category in declared order;
    a later detection of the same name overwrites an earlier one. Pure and
    never raises for empty input: an empty signal yields an empty map.

    Args:
        signal: Aggregated repository signal.
        catalog: Merged taxonomy catalog.
        keyword_matcher: Keyword strategy, plain substring matching by default.
        config: Scoring thresholds.

    Returns:
        Mapping of skill display name to DetectedSkill.
    """
    if signal.is_empty or len(catalog) == 0:
        return {}

    matcher = keyword_matcher or DEFAULT_KEYWORD_MATCHER
    detected: dict[str, DetectedSkill] = dict(score_languages(signal, catalog, config))

    for skill in score_keywords(signal, catalog, matcher, config):
        if skill.name in detected:
            logger.debug("Keyword match for %s overwrites earlier detection", skill.name)
        detected[skill.name] = skill

    logger.info("Matched %d skills from signal", len(detected))
    return detected
