"""Deterministic radial layout: center, category ring, skill ring."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from skill_tree.config import LAYOUT_CONFIG, LayoutConfig
from skill_tree.entities.layout import (
    Connection,
    LayoutNode,
    NodeType,
    Point,
    SkillLayout,
)
from skill_tree.entities.taxonomy import TaxonomyCategory
from skill_tree.nodes.layout.geometry import (
    arc_angles,
    clip_to_box,
    label_size,
    polar_point,
    ring_angles,
    round_point,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from skill_tree.entities.layout import Size
    from skill_tree.entities.skills import DetectedSkill

logger = logging.getLogger(__name__)

CENTER_NODE_ID = "center"
ANGLE_PRECISION = 6


def category_node_id(category: str) -> str:
    return f"category:{category}"


def skill_node_id(category: str, skill_key: str) -> str:
    return f"skill:{category}:{skill_key}"


def category_label(category: str) -> str:
    """Human label for a category key, e.g. ``data-science`` -> ``Data Science``."""
    return category.replace("-", " ").replace("_", " ").title()


def group_by_category(skills: Sequence[DetectedSkill]) -> dict[str, list[DetectedSkill]]:
    """Group ring skills by category, keeping input order and dropping duplicates.

    Meta skills never become ring nodes.
    """
    grouped: dict[str, list[DetectedSkill]] = {}
    seen: set[tuple[str, str]] = set()
    for skill in skills:
        if skill.category == TaxonomyCategory.META:
            continue
        pair = (skill.category, skill.name)
        if pair in seen:
            continue
        seen.add(pair)
        grouped.setdefault(skill.category, []).append(skill)
    return grouped


def _make_node(
    node_id: str,
    label: str,
    node_type: NodeType,
    cx: float,
    cy: float,
    size: Size,
    config: LayoutConfig,
    category: str | None = None,
    skill: DetectedSkill | None = None,
    angle: float | None = None,
) -> LayoutNode:
    p = config.precision
    return LayoutNode(
        id=node_id,
        label=label,
        node_type=node_type,
        category=category,
        skill=skill,
        angle=round(angle, ANGLE_PRECISION) if angle is not None else None,
        position=round_point(cx - size.w / 2, cy - size.h / 2, p),
        bounding_box=size,
        center_point=round_point(cx, cy, p),
    )


def _connect(parent: LayoutNode, child: LayoutNode, precision: int) -> Connection:
    fx, fy = clip_to_box(parent.center_point, parent.bounding_box, child.center_point)
    tx, ty = clip_to_box(child.center_point, child.bounding_box, parent.center_point)
    return Connection(
        source_id=parent.id,
        target_id=child.id,
        from_point=round_point(fx, fy, precision),
        to_point=round_point(tx, ty, precision),
    )


def canvas_height(nodes: Sequence[LayoutNode], config: LayoutConfig = LAYOUT_CONFIG) -> float:
    """Lowest node edge plus bottom padding, floored at the minimum height."""
    if not nodes:
        return config.min_height
    bottom = max(node.bottom for node in nodes)
    return round(max(config.min_height, bottom + config.bottom_padding), config.precision)


def layout_skill_tree(
    skills: Sequence[DetectedSkill],
    center_label: str,
    config: LayoutConfig = LAYOUT_CONFIG,
) -> SkillLayout:
    """Place skills on three concentric rings around a center node.

    Categories are sorted by name and spaced ``2*pi/N`` apart on the inner
    ring (rotated by half a step for even N). Up to
    ``config.max_skills_per_category`` skills per category, in input order,
    are spread across ``arc_fraction`` of the step on the outer ring; further
    skills are truncated. Each category connects to the center and each
    displayed skill to its category, regardless of taxonomy parents.

    Args:
        skills: Ordered skills from the hierarchy builder.
        center_label: Label of the center node.
        config: Ring geometry.

    Returns:
        SkillLayout with nodes, connections and canvas size. With no ring
        skills the layout holds only the center node.
    """
    p = config.precision
    cx, cy = config.center_x, config.center_y

    center = _make_node(
        CENTER_NODE_ID,
        center_label,
        NodeType.CENTER,
        cx,
        cy,
        label_size(center_label, config.center_size, config.char_width, config.label_padding),
        config,
    )
    nodes: list[LayoutNode] = [center]
    connections: list[Connection] = []

    grouped = group_by_category(skills)
    categories = sorted(grouped)
    if not categories:
        return SkillLayout(
            nodes=nodes,
            connections=connections,
            canvas_width=config.canvas_width,
            canvas_height=canvas_height(nodes, config),
        )

    step = 2 * math.pi / len(categories)
    outer_radius = config.inner_radius + config.ring_spacing
    truncated = 0

    for category, angle in zip(categories, ring_angles(len(categories)), strict=True):
        label = category_label(category)
        x, y = polar_point(cx, cy, config.inner_radius, angle)
        category_node = _make_node(
            category_node_id(category),
            label,
            NodeType.CATEGORY,
            x,
            y,
            label_size(label, config.category_size, config.char_width, config.label_padding),
            config,
            category=category,
            angle=angle,
        )
        nodes.append(category_node)
        connections.append(_connect(center, category_node, p))

        members = grouped[category]
        shown = members[: config.max_skills_per_category]
        truncated += len(members) - len(shown)
        for skill, skill_angle in zip(
            shown, arc_angles(angle, config.arc_fraction * step, len(shown)), strict=True
        ):
            sx, sy = polar_point(cx, cy, outer_radius, skill_angle)
            skill_node = _make_node(
                skill_node_id(category, skill.key),
                skill.name,
                NodeType.SKILL,
                sx,
                sy,
                label_size(skill.name, config.skill_size, config.char_width, config.label_padding),
                config,
                category=category,
                skill=skill,
                angle=skill_angle,
            )
            nodes.append(skill_node)
            connections.append(_connect(category_node, skill_node, p))

    if truncated:
        logger.debug("Truncated %d skills beyond the per-category limit", truncated)

    return SkillLayout(
        nodes=nodes,
        connections=connections,
        canvas_width=config.canvas_width,
        canvas_height=canvas_height(nodes, config),
    )
