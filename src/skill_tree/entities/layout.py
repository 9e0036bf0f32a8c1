"""Positioned node graph handed to renderers."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from skill_tree.entities.skills import DetectedSkill  # noqa: TC001


class NodeType(StrEnum):
    """Ring a layout node belongs to."""

    CENTER = "center"
    CATEGORY = "category"
    SKILL = "skill"


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    w: float
    h: float


class LayoutNode(BaseModel):
    """A node placed on the canvas.

    ``position`` is the top-left corner of ``bounding_box``; ``center_point``
    is where connectors attach before clipping.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    node_type: NodeType
    category: str | None = None
    skill: DetectedSkill | None = None
    angle: float | None = None
    position: Point
    bounding_box: Size
    center_point: Point

    @property
    def bottom(self) -> float:
        return self.position.y + self.bounding_box.h


class Connection(BaseModel):
    """Connector from a layout parent to its child."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    from_point: Point
    to_point: Point


class SkillLayout(BaseModel):
    """Complete layout: nodes, connectors and canvas size."""

    model_config = ConfigDict(frozen=True)

    nodes: list[LayoutNode] = Field(default_factory=list)
    connections: list[Connection] = Field(default_factory=list)
    canvas_width: float
    canvas_height: float

    def get_node(self, node_id: str) -> LayoutNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
