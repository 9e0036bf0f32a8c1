"""Keyword detection strategies used by the skill matcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rapidfuzz import fuzz

if TYPE_CHECKING:
    from collections.abc import Iterable

# Fuzzy matching threshold (0-100)
FUZZY_MIN_THRESHOLD = 90
# Keywords shorter than this are only matched exactly
FUZZY_MIN_KEYWORD_LENGTH = 4


@runtime_checkable
class KeywordMatcher(Protocol):
    """Decides whether any of an entry's keywords occurs in a text."""

    def matches(self, keywords: Iterable[str], text: str) -> bool: ...


class SubstringKeywordMatcher:
    """Plain substring containment, no stemming or tokenization."""

    def matches(self, keywords: Iterable[str], text: str) -> bool:
        if not text:
            return False
        return any(keyword and keyword in text for keyword in keywords)


class FuzzyKeywordMatcher:
    """Substring matching widened with rapidfuzz partial ratios.

    Tolerates small spelling variants ("postgre" vs "postgres") for keywords
    long enough that a partial match is meaningful.
    """

    def __init__(self, threshold: int = FUZZY_MIN_THRESHOLD) -> None:
        self.threshold = threshold

    def matches(self, keywords: Iterable[str], text: str) -> bool:
        if not text:
            return False
        for keyword in keywords:
            if not keyword:
                continue
            if keyword in text:
                return True
            if len(keyword) < FUZZY_MIN_KEYWORD_LENGTH:
                continue
            if fuzz.partial_ratio(keyword, text) >= self.threshold:
                return True
        return False


DEFAULT_KEYWORD_MATCHER = SubstringKeywordMatcher()
