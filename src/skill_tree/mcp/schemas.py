"""Pydantic input/output models for MCP tool handlers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from skill_tree.entities.signals import RepoRecord  # noqa: TC001

# ---------------------------------------------------------------------------
# Input models (keep descriptions under 10 words)
# ---------------------------------------------------------------------------


class SkillTreeInput(BaseModel):
    """Input for generate_skill_tree tool."""

    repos: list[RepoRecord] = Field(default_factory=list, description="Repository records")
    center_label: str = Field(default="Developer", description="Center node label")
    sources: list[str] | None = Field(default=None, description="Taxonomy sources to load")
    include_forks: bool = Field(default=False, description="Count forked repositories")
    include_svg: bool = Field(default=True, description="Render SVG markup")


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------


class SkillSummary(BaseModel):
    """A detected skill as reported to clients."""

    name: str
    category: str
    level: int
    parent: str | None = None
    depth: int = 0
    repo_count: int = 0
    inferred: bool = False


class NodeOutput(BaseModel):
    """A positioned node."""

    id: str
    label: str
    type: str
    x: float
    y: float
    width: float
    height: float


class ConnectionOutput(BaseModel):
    """A connector between two nodes."""

    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float


class SkillTreeOutput(BaseModel):
    """Result of generate_skill_tree tool."""

    center_label: str
    skills: list[SkillSummary]
    nodes: list[NodeOutput]
    connections: list[ConnectionOutput]
    width: float
    height: float
    sources: list[str] = Field(default_factory=list)
    svg: str | None = None
    error: str | None = None


class TaxonomySourceInfo(BaseModel):
    """One registered taxonomy source."""

    name: str
    entry_count: int
    categories: list[str]


class TaxonomySourcesOutput(BaseModel):
    """Result of list_taxonomy_sources tool."""

    sources: list[TaxonomySourceInfo]
