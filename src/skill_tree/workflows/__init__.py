"""Workflows package."""

from skill_tree.workflows.hierarchy_builder import (
    backfill_ancestors,
    build_hierarchy,
    inferred_level,
)
from skill_tree.workflows.models import SkillTreeResult
from skill_tree.workflows.pipeline import SkillTreePipeline, pick_center_label

__all__ = [
    "SkillTreePipeline",
    "SkillTreeResult",
    "backfill_ancestors",
    "build_hierarchy",
    "inferred_level",
    "pick_center_label",
]
