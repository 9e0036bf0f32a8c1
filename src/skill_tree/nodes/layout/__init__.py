"""Layout nodes: radial placement and geometry helpers."""

from __future__ import annotations

from skill_tree.nodes.layout.geometry import (
    arc_angles,
    clip_to_box,
    label_size,
    polar_point,
    ring_angles,
)
from skill_tree.nodes.layout.radial import (
    CENTER_NODE_ID,
    canvas_height,
    category_label,
    category_node_id,
    group_by_category,
    layout_skill_tree,
    skill_node_id,
)

__all__ = [
    "CENTER_NODE_ID",
    "arc_angles",
    "canvas_height",
    "category_label",
    "category_node_id",
    "clip_to_box",
    "group_by_category",
    "label_size",
    "layout_skill_tree",
    "polar_point",
    "ring_angles",
    "skill_node_id",
]
