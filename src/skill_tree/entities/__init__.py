"""Entity models for the skill-tree domain layer."""

from skill_tree.entities.layout import (
    Connection,
    LayoutNode,
    NodeType,
    Point,
    Size,
    SkillLayout,
)
from skill_tree.entities.signals import RepoRecord, RepoSignal
from skill_tree.entities.skills import DetectedSkill
from skill_tree.entities.taxonomy import (
    Difficulty,
    TaxonomyCategory,
    TaxonomyEntry,
    slugify,
)

__all__ = [
    "Connection",
    "DetectedSkill",
    "Difficulty",
    "LayoutNode",
    "NodeType",
    "Point",
    "RepoRecord",
    "RepoSignal",
    "Size",
    "SkillLayout",
    "TaxonomyCategory",
    "TaxonomyEntry",
    "slugify",
]
