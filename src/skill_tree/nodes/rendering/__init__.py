"""Rendering nodes."""

from __future__ import annotations

from skill_tree.nodes.rendering.svg import render_error_svg, render_svg

__all__ = ["render_error_svg", "render_svg"]
