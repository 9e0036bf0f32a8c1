"""Detected skill records produced by matching and hierarchy resolution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DetectedSkill(BaseModel):
    """A taxonomy entry confirmed present in a signal.

    ``inferred`` skills were synthesized by the hierarchy builder to complete
    an ancestor chain and were never matched directly.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    key: str
    category: str
    level: int = Field(ge=1, le=5)
    parent_name: str | None = None
    tree_depth: int = 0
    repo_count: int = 0
    inferred: bool = False
    source_weight: float = 1.0
    percentage: float | None = None  # language byte share, language matches only
