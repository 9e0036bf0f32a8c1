"""Language byte-share scoring."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skill_tree.config import MATCHER_CONFIG, MatcherConfig
from skill_tree.entities.skills import DetectedSkill
from skill_tree.entities.taxonomy import TaxonomyCategory

if TYPE_CHECKING:
    from skill_tree.entities.signals import RepoSignal
    from skill_tree.entities.taxonomy import TaxonomyEntry
    from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog

logger = logging.getLogger(__name__)


def language_level(adjusted_percentage: float, config: MatcherConfig = MATCHER_CONFIG) -> int:
    """Map a weighted byte percentage to a level, 0 meaning not detected."""
    for minimum, level in config.language_thresholds:
        if adjusted_percentage >= minimum:
            return level
    return 0


def build_language_index(catalog: TaxonomyCatalog) -> dict[str, TaxonomyEntry]:
    """Index language entries by lowercase display name, key and keywords.

    Display names and keys take precedence over keywords when two entries
    claim the same alias.
    """
    index: dict[str, TaxonomyEntry] = {}
    languages = catalog.by_category(TaxonomyCategory.LANGUAGE)
    for entry in languages:
        for keyword in sorted(entry.keywords):
            index.setdefault(keyword, entry)
    for entry in languages:
        index[entry.key] = entry
        index[entry.display_name.lower()] = entry
    return index


def parent_display_name(entry: TaxonomyEntry, catalog: TaxonomyCatalog) -> str | None:
    """Display name of the entry's parent, None when absent or unresolved."""
    if entry.parent_key is None:
        return None
    parent = catalog.get(entry.parent_key)
    return parent.display_name if parent is not None else None


def score_languages(
    signal: RepoSignal,
    catalog: TaxonomyCatalog,
    config: MatcherConfig = MATCHER_CONFIG,
) -> dict[str, DetectedSkill]:
    """Score every language in the signal's byte histogram.

    ``percentage = bytes / total * 100`` is multiplied by the entry weight and
    mapped through the level thresholds; level-0 languages are dropped.
    """
    total = signal.total_bytes
    if total <= 0:
        return {}

    index = build_language_index(catalog)
    detected: dict[str, DetectedSkill] = {}

    # Largest share first, name as tiebreak
    for language, count in sorted(
        signal.language_bytes.items(), key=lambda x: (-x[1], x[0])
    ):
        entry = index.get(language.strip().lower())
        if entry is None:
            logger.debug("Language %s has no taxonomy entry", language)
            continue
        if entry.display_name in detected:
            # An alias with a larger share already scored this entry
            continue

        percentage = count / total * 100
        level = language_level(percentage * entry.weight, config)
        if level == 0:
            continue

        detected[entry.display_name] = DetectedSkill(
            name=entry.display_name,
            key=entry.key,
            category=entry.category,
            level=level,
            parent_name=parent_display_name(entry, catalog),
            repo_count=0,
            source_weight=entry.weight,
            percentage=round(percentage, 2),
        )

    return detected
