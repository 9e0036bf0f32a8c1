"""Polar placement, box sizing and connector clipping helpers."""

from __future__ import annotations

import math

import numpy as np

from skill_tree.entities.layout import Point, Size


def polar_point(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    """Cartesian point at ``radius`` and ``angle`` (radians) around (cx, cy)."""
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def ring_angles(count: int) -> list[float]:
    """Evenly spaced ring angles starting at true north.

    Even counts are rotated by half a step so no node sits at -pi/2.
    """
    if count <= 0:
        return []
    step = 2 * math.pi / count
    start = -math.pi / 2
    if count % 2 == 0:
        start += step / 2
    return [start + i * step for i in range(count)]


def arc_angles(center_angle: float, span: float, count: int) -> list[float]:
    """``count`` angles spread across an arc of ``span`` centered on ``center_angle``.

    One angle sits exactly on the center; several are interpolated linearly
    with the first and last at the arc's endpoints.
    """
    if count <= 0:
        return []
    if count == 1:
        return [center_angle]
    half = span / 2
    return [float(a) for a in np.linspace(center_angle - half, center_angle + half, count)]


def label_size(
    label: str,
    min_size: tuple[float, float],
    char_width: float,
    padding: float,
) -> Size:
    """Box wide enough for ``label``, never smaller than ``min_size``."""
    width = max(min_size[0], len(label) * char_width + padding)
    return Size(w=width, h=min_size[1])


def round_point(x: float, y: float, precision: int) -> Point:
    # Normalize -0.0 so serialized output stays byte-stable
    return Point(x=round(x, precision) + 0.0, y=round(y, precision) + 0.0)


def clip_to_box(center: Point, box: Size, toward: Point) -> tuple[float, float]:
    """Where the segment from ``center`` to ``toward`` leaves the box around ``center``.

    Returns ``center`` itself when both points coincide.
    """
    dx = toward.x - center.x
    dy = toward.y - center.y
    if dx == 0 and dy == 0:
        return center.x, center.y

    half_w = box.w / 2
    half_h = box.h / 2
    scales: list[float] = []
    if dx != 0:
        scales.append(half_w / abs(dx))
    if dy != 0:
        scales.append(half_h / abs(dy))
    t = min(min(scales), 1.0)
    return center.x + dx * t, center.y + dy * t
