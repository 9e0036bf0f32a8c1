"""Repository records and the aggregated signal the matcher consumes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepoRecord(BaseModel):
    """One repository as reported by the upstream API."""

    name: str
    description: str | None = None
    topics: list[str] = Field(default_factory=list)
    language: str | None = None
    languages: dict[str, int] = Field(
        default_factory=dict, description="Language name -> byte count"
    )
    fork: bool = False


class RepoSignal(BaseModel):
    """Normalized, read-only signal aggregated across a user's repositories."""

    model_config = ConfigDict(frozen=True)

    language_bytes: dict[str, int] = Field(default_factory=dict)
    search_text: str = Field(
        default="", description="Lower-cased names, descriptions and topics"
    )
    repo_topics: list[frozenset[str]] = Field(default_factory=list)
    repo_texts: list[str] = Field(
        default_factory=list, description="One lower-cased text blob per repository"
    )

    @field_validator("search_text", mode="before")
    @classmethod
    def lowercase_text(cls, v: object) -> str:
        return str(v or "").lower()

    @field_validator("repo_texts", mode="before")
    @classmethod
    def lowercase_texts(cls, v: object) -> list[str]:
        return [str(t or "").lower() for t in (v or [])]  # type: ignore[union-attr]

    @field_validator("repo_topics", mode="before")
    @classmethod
    def lowercase_topics(cls, v: object) -> list[frozenset[str]]:
        return [
            frozenset(str(t).strip().lower() for t in topics if str(t).strip())
            for topics in (v or [])  # type: ignore[union-attr]
        ]

    @property
    def total_bytes(self) -> int:
        return sum(self.language_bytes.values())

    @property
    def is_empty(self) -> bool:
        """True when the signal carries nothing a matcher could use."""
        return self.total_bytes == 0 and not self.search_text.strip()
