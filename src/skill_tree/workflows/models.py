"""Pipeline result models for skill tree generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skill_tree.entities.layout import SkillLayout
    from skill_tree.entities.skills import DetectedSkill


@dataclass
class SkillTreeResult:
    """Result of one inference-and-layout run.

    Contains the raw detections, the ordered hierarchy, the computed layout,
    the taxonomy sources consulted, and timing.
    """

    detected: dict[str, DetectedSkill]
    hierarchy: list[DetectedSkill]
    layout: SkillLayout
    center_label: str
    sources: list[str] = field(default_factory=list)
    latency_ms: float = 0.0
    cache_hit: bool = False

    @property
    def is_minimal(self) -> bool:
        """True for the degenerate single-node profile."""
        return len(self.layout.nodes) == 1
