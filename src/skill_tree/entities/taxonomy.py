"""Domain models for the curated technology taxonomy."""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxonomyCategory(StrEnum):
    """Known taxonomy categories, in the matcher's evaluation order."""

    LANGUAGE = "language"
    FRAMEWORK = "framework"
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASE = "database"
    DATA_SCIENCE = "data-science"
    MOBILE = "mobile"
    DEVOPS = "devops"
    CLOUD = "cloud"
    TESTING = "testing"
    SECURITY = "security"
    TOOLS = "tools"
    CONCEPT = "concept"
    META = "meta"  # role labels, rendered only as the center node


class Difficulty(StrEnum):
    """Estimated learning difficulty of a taxonomy entry."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TaxonomyEntry(BaseModel):
    """Immutable catalog entry describing one technology.

    Entries from every source are normalized into this shape at load time,
    whatever field names the upstream payload used.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Unique key within a source, lowercase-hyphenated")
    display_name: str
    keywords: frozenset[str] = Field(default_factory=frozenset)
    category: str = TaxonomyCategory.CONCEPT
    parent_key: str | None = None
    weight: float = 1.0
    icon: str = ""
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    source: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)

    @field_validator("key", "parent_key", mode="before")
    @classmethod
    def normalize_key(cls, v: str | None) -> str | None:
        """Lowercase keys and collapse whitespace into hyphens."""
        if v is None:
            return None
        return slugify(str(v))

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v: object) -> frozenset[str]:
        """Store keywords lower-cased and stripped, dropping blanks."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(
            str(k).strip().lower() for k in v  # type: ignore[union-attr]
            if str(k).strip()
        )

    @property
    def is_language(self) -> bool:
        return self.category == TaxonomyCategory.LANGUAGE


def slugify(label: str) -> str:
    """Produce a lowercase-hyphenated key from a free-form label."""
    slug = re.sub(r"[^a-z0-9+#.]+", "-", label.strip().lower())
    return slug.strip("-")
