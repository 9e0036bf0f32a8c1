"""Ancestor back-fill and ordering of detected skills."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skill_tree.entities.skills import DetectedSkill
from skill_tree.memory.taxonomy_graph import TaxonomyGraph

if TYPE_CHECKING:
    from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog

logger = logging.getLogger(__name__)


def inferred_level(child_level: int) -> int:
    """Level of a synthesized ancestor: one below its child, floored at 1."""
    return max(1, child_level - 1)


def _key_of(skill: DetectedSkill, catalog: TaxonomyCatalog) -> str | None:
    return skill.key if skill.key in catalog else None


def backfill_ancestors(
    detected: dict[str, DetectedSkill],
    catalog: TaxonomyCatalog,
    graph: TaxonomyGraph,
) -> dict[str, DetectedSkill]:
    """Insert inferred skills for every missing taxonomy ancestor.

    Walks each detected skill's parent chain (input order) until an ancestor
    already present is reached or the chain ends.

    Raises:
        TaxonomyCycleError: If a parent chain loops.
    """
    resolved = dict(detected)
    present_keys = {s.key for s in resolved.values()}

    for skill in list(detected.values()):
        key = _key_of(skill, catalog)
        if key is None:
            logger.warning("Detected skill %s is not in the taxonomy, skipping", skill.name)
            continue

        child_level = skill.level
        for ancestor_key in graph.ancestor_chain(key):
            if ancestor_key in present_keys:
                break
            entry = catalog.get(ancestor_key)
            if entry is None:
                break
            # A detection sharing the ancestor's name already stands in for it
            if entry.display_name in resolved:
                break
            parent_key = graph.parent(ancestor_key)
            parent_entry = catalog.get(parent_key) if parent_key else None
            child_level = inferred_level(child_level)
            inferred = DetectedSkill(
                name=entry.display_name,
                key=entry.key,
                category=entry.category,
                level=child_level,
                parent_name=parent_entry.display_name if parent_entry else None,
                repo_count=0,
                inferred=True,
                source_weight=entry.weight,
            )
            logger.debug("Inferred ancestor %s for %s", inferred.name, skill.name)
            resolved[inferred.name] = inferred
            present_keys.add(ancestor_key)

    return resolved


def build_hierarchy(
    detected: dict[str, DetectedSkill],
    catalog: TaxonomyCatalog,
    graph: TaxonomyGraph | None = None,
) -> list[DetectedSkill]:
    """Resolve parents, back-fill ancestors and order the detected skills.

    Args:
        detected: Output of the skill matcher.
        catalog: Taxonomy the skills were matched against.
        graph: Pre-built parent graph for ``catalog``; built when omitted.

    Returns:
        Skills sorted by taxonomy depth ascending, then level descending,
        then name.

    Raises:
        TaxonomyCycleError: If the taxonomy parent chain of a detected skill
            contains a cycle.
    """
    if not detected:
        return []

    graph = graph or TaxonomyGraph.from_catalog(catalog)
    resolved = backfill_ancestors(detected, catalog, graph)

    ordered: list[DetectedSkill] = []
    for skill in resolved.values():
        depth = graph.depth(skill.key) if skill.key in catalog else 0
        ordered.append(skill.model_copy(update={"tree_depth": depth}))

    ordered.sort(key=lambda s: (s.tree_depth, -s.level, s.name))
    inferred_count = sum(1 for s in ordered if s.inferred)
    logger.info(
        "Built hierarchy with %d skills (%d inferred)", len(ordered), inferred_count
    )
    return ordered
