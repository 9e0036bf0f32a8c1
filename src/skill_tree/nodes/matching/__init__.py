"""Matching nodes: language scoring and keyword detection."""

from __future__ import annotations

from skill_tree.nodes.matching.keyword_matchers import (
    DEFAULT_KEYWORD_MATCHER,
    FuzzyKeywordMatcher,
    KeywordMatcher,
    SubstringKeywordMatcher,
)
from skill_tree.nodes.matching.language_scorer import (
    build_language_index,
    language_level,
    score_languages,
)
from skill_tree.nodes.matching.skill_matcher import (
    KEYWORD_CATEGORY_ORDER,
    category_order,
    keyword_level,
    match_skills,
    score_keywords,
)

__all__ = [
    "DEFAULT_KEYWORD_MATCHER",
    "KEYWORD_CATEGORY_ORDER",
    "FuzzyKeywordMatcher",
    "KeywordMatcher",
    "SubstringKeywordMatcher",
    "build_language_index",
    "category_order",
    "keyword_level",
    "language_level",
    "match_skills",
    "score_keywords",
    "score_languages",
]
