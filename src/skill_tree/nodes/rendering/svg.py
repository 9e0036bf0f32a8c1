"""Serialize a computed SkillLayout as SVG markup."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.saxutils import escape, quoteattr

from skill_tree.entities.layout import NodeType

if TYPE_CHECKING:
    from skill_tree.entities.layout import LayoutNode, SkillLayout

NODE_FILL: dict[NodeType, str] = {
    NodeType.CENTER: "#1e293b",
    NodeType.CATEGORY: "#0ea5e9",
    NodeType.SKILL: "#38bdf8",
}
BACKGROUND_FILL = "#f0f4f8"
CONNECTOR_STROKE = "#94a3b8"
FONT_SIZE: dict[NodeType, int] = {
    NodeType.CENTER: 14,
    NodeType.CATEGORY: 12,
    NodeType.SKILL: 11,
}


def _fmt(value: float) -> str:
    return f"{value:g}"


def _node_label(node: LayoutNode) -> str:
    if node.node_type == NodeType.SKILL and node.skill is not None:
        return f"{node.label} (Lv {node.skill.level})"
    return node.label


def _render_node(node: LayoutNode) -> str:
    x, y = node.position.x, node.position.y
    w, h = node.bounding_box.w, node.bounding_box.h
    inferred = node.skill is not None and node.skill.inferred
    dash = ' stroke="#0f172a" stroke-dasharray="4 2"' if inferred else ""
    return (
        f'<g class="node {node.node_type.value}" data-id={quoteattr(node.id)}>'
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
        f'rx="6" fill="{NODE_FILL[node.node_type]}"{dash}/>'
        f'<text x="{_fmt(node.center_point.x)}" y="{_fmt(node.center_point.y)}" '
        f'text-anchor="middle" dominant-baseline="middle" '
        f'font-size="{FONT_SIZE[node.node_type]}" fill="white">'
        f"{escape(_node_label(node))}</text></g>"
    )


def render_svg(layout: SkillLayout, title: str | None = None) -> str:
    """Render nodes as labelled rounded boxes joined by straight connectors.

    Inferred skills get a dashed outline. Output depends only on ``layout``.
    """
    width, height = _fmt(layout.canvas_width), _fmt(layout.canvas_height)
    parts = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect width="100%" height="100%" fill="{BACKGROUND_FILL}"/>',
    ]
    if title:
        parts.append(
            f'<text x="10" y="20" font-size="14" fill="#1e293b">{escape(title)}</text>'
        )
    for conn in layout.connections:
        parts.append(
            f'<line x1="{_fmt(conn.from_point.x)}" y1="{_fmt(conn.from_point.y)}" '
            f'x2="{_fmt(conn.to_point.x)}" y2="{_fmt(conn.to_point.y)}" '
            f'stroke="{CONNECTOR_STROKE}" stroke-width="1.5"/>'
        )
    parts.extend(_render_node(node) for node in layout.nodes)
    parts.append("</svg>")
    return "\n".join(parts)


def render_error_svg(message: str) -> str:
    """Small placeholder graphic carrying an error message."""
    return (
        '<svg width="300" height="100" viewBox="0 0 300 100" '
        'xmlns="http://www.w3.org/2000/svg">'
        '<rect width="100%" height="100%" fill="#fee2e2"/>'
        '<text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle" '
        f'font-size="14" fill="#ef4444">ERROR: {escape(message)}</text>'
        "</svg>"
    )
