"""Normalize heterogeneous taxonomy payloads into TaxonomyEntry objects.

Two payload families are understood:

- curated catalogs: ``{"entries": [{"key", "name", "keywords", ...}]}``
- roadmap.sh exports: ``{"nodes": [...], "edges": [...]}``, a bare node
  list, or a nested ``content`` tree

Everything source-specific (label field names, node types, edge shapes) is
resolved here so matching and layout only ever see ``TaxonomyEntry``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from skill_tree.entities.taxonomy import (
    Difficulty,
    TaxonomyCategory,
    TaxonomyEntry,
    slugify,
)

logger = logging.getLogger(__name__)

MAX_GENERATED_KEYWORDS = 15

STOPWORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "should", "could", "may", "might", "must", "can", "this", "that",
})

# First matching rule wins, so order matters
CATEGORY_RULES: tuple[tuple[TaxonomyCategory, tuple[str, ...]], ...] = (
    (TaxonomyCategory.LANGUAGE, (
        "javascript", "typescript", "python", "java", "go", "rust", "c++",
        "c#", "php", "ruby", "kotlin", "swift", "scala", "language",
    )),
    (TaxonomyCategory.FRAMEWORK, (
        "react", "vue", "angular", "flask", "spring", "express", "laravel",
        "asp.net", "rails", "fastapi", "framework", "library",
    )),
    (TaxonomyCategory.DATABASE, (
        "sql", "nosql", "mongodb", "postgresql", "mysql", "redis",
        "cassandra", "database", "db", "orm",
    )),
    (TaxonomyCategory.DEVOPS, (
        "docker", "kubernetes", "ci/cd", "jenkins", "github actions",
        "gitlab ci", "deployment", "pipeline", "devops",
    )),
    (TaxonomyCategory.CLOUD, (
        "aws", "azure", "gcp", "cloud", "serverless", "lambda", "ec2",
    )),
    (TaxonomyCategory.TESTING, (
        "test", "jest", "mocha", "cypress", "selenium", "junit", "testing",
    )),
    (TaxonomyCategory.SECURITY, (
        "security", "authentication", "authorization", "oauth", "jwt",
        "encryption", "ssl", "tls",
    )),
    (TaxonomyCategory.FRONTEND, (
        "html", "css", "dom", "browser", "webpack", "vite", "frontend", "ui", "ux",
    )),
    (TaxonomyCategory.BACKEND, (
        "api", "rest", "graphql", "microservices", "backend", "server",
    )),
    (TaxonomyCategory.MOBILE, (
        "android", "ios", "mobile", "react native", "flutter",
    )),
    (TaxonomyCategory.DATA_SCIENCE, (
        "machine learning", "ai", "data science", "analytics", "ml",
        "tensorflow", "pytorch", "numpy", "pandas",
    )),
    (TaxonomyCategory.TOOLS, (
        "git", "npm", "yarn", "webpack", "babel", "eslint", "tool",
    )),
)

# Roadmap node types that only decorate the diagram
META_NODE_TYPES: frozenset[str] = frozenset({
    "title", "label", "paragraph", "button", "legend", "section",
    "vertical", "horizontal", "linksgroup",
})

ADVANCED_TERMS = ("kubernetes", "microservices", "system design", "architecture", "advanced")
INTERMEDIATE_TERMS = ("api", "database", "framework", "testing")

_WORD_RE = re.compile(r"\b\w+\b")


def extract_label(node: dict[str, Any]) -> str:
    """First present label-like field of a raw node."""
    data = node.get("data") if isinstance(node.get("data"), dict) else {}
    for value in (
        node.get("label"),
        data.get("label"),
        node.get("title"),
        node.get("name"),
        node.get("display_name"),
        node.get("text"),
        node.get("id"),
    ):
        if value:
            return str(value).strip()
    return "Unknown"


def extract_description(node: dict[str, Any]) -> str:
    """First present description-like field of a raw node."""
    data = node.get("data") if isinstance(node.get("data"), dict) else {}
    for value in (
        node.get("description"),
        data.get("description"),
        node.get("desc"),
        node.get("content"),
    ):
        if value and isinstance(value, str):
            return value.strip()
    return ""


def categorize(label: str, description: str, node_type: str = "") -> str:
    """Assign a category from the keyword rule table, else from the node type."""
    text = f"{label} {description}".lower()
    for category, terms in CATEGORY_RULES:
        if any(term in text for term in terms):
            return category.value
    if node_type.lower() in META_NODE_TYPES:
        return TaxonomyCategory.META.value
    return TaxonomyCategory.CONCEPT.value


def estimate_difficulty(label: str) -> Difficulty:
    lowered = label.lower()
    if any(term in lowered for term in ADVANCED_TERMS):
        return Difficulty.ADVANCED
    if any(term in lowered for term in INTERMEDIATE_TERMS):
        return Difficulty.INTERMEDIATE
    return Difficulty.BEGINNER


def generate_keywords(label: str, description: str) -> list[str]:
    """Distinct non-stopword words (length > 2) of label and description."""
    words = _WORD_RE.findall(f"{label} {description}".lower())
    keywords: list[str] = []
    for word in words:
        if word in STOPWORDS or len(word) <= 2 or word in keywords:
            continue
        keywords.append(word)
        if len(keywords) >= MAX_GENERATED_KEYWORDS:
            break
    return keywords


def extract_nodes_from_content(content: Any) -> list[dict[str, Any]]:
    """Collect every dict carrying a label, title or name from a nested tree."""
    found: list[dict[str, Any]] = []

    def _walk(obj: Any) -> None:
        if isinstance(obj, list):
            for item in obj:
                _walk(item)
        elif isinstance(obj, dict):
            if obj.get("label") or obj.get("title") or obj.get("name"):
                found.append(obj)
            for value in obj.values():
                _walk(value)

    _walk(content)
    return found


def _parse_curated(entries: list[Any], source_name: str) -> list[TaxonomyEntry]:
    parsed: list[TaxonomyEntry] = []
    for raw in entries:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object taxonomy entry in %s", source_name)
            continue
        label = extract_label(raw)
        key = raw.get("key") or raw.get("id") or slugify(label)
        keywords = raw.get("keywords") or raw.get("synonyms") or []
        if isinstance(keywords, str):
            keywords = [keywords]
        description = extract_description(raw)
        category = raw.get("category") or categorize(label, description)
        parsed.append(
            TaxonomyEntry(
                key=key,
                display_name=label,
                keywords=keywords or [label],
                category=str(category).lower(),
                parent_key=raw.get("parent") or raw.get("parent_key"),
                weight=float(raw.get("weight", 1.0)),
                icon=str(raw.get("icon", "")),
                description=description,
                difficulty=raw.get("difficulty") or estimate_difficulty(label),
                source=source_name,
                metadata={str(k): str(v) for k, v in (raw.get("metadata") or {}).items()},
            )
        )
    return parsed


def _parse_roadmap(
    raw_nodes: list[Any], raw_edges: list[Any], source_name: str
) -> list[TaxonomyEntry]:
    node_keys: dict[str, str] = {}  # raw node id -> entry key
    staged: list[tuple[str, dict[str, Any], str, str]] = []
    for raw in raw_nodes:
        if not isinstance(raw, dict):
            continue
        label = extract_label(raw)
        key = slugify(str(raw.get("id") or raw.get("key") or label))
        if not key:
            continue
        raw_id = str(raw.get("id") or raw.get("key") or key)
        node_keys[raw_id] = key
        staged.append((key, raw, label, extract_description(raw)))

    parents: dict[str, str] = {}
    for edge in raw_edges:
        if not isinstance(edge, dict):
            continue
        source = node_keys.get(str(edge.get("source") or edge.get("from") or ""))
        target = node_keys.get(str(edge.get("target") or edge.get("to") or ""))
        if source is None or target is None or source == target:
            continue
        parents.setdefault(target, source)

    parsed: list[TaxonomyEntry] = []
    for key, raw, label, description in staged:
        node_type = str(raw.get("type") or "")
        parsed.append(
            TaxonomyEntry(
                key=key,
                display_name=label,
                keywords=[*generate_keywords(label, description), label],
                category=categorize(label, description, node_type),
                parent_key=parents.get(key),
                description=description,
                difficulty=estimate_difficulty(label),
                source=source_name,
                metadata={
                    "type": node_type or "node",
                    "required": str(bool(raw.get("required", False))).lower(),
                },
            )
        )
    return parsed


def parse_taxonomy_payload(payload: Any, source_name: str) -> list[TaxonomyEntry]:
    """Convert a raw taxonomy payload into entries.

    Args:
        payload: Decoded JSON from a taxonomy source.
        source_name: Name recorded on every produced entry.

    Returns:
        Entries in payload order.

    Raises:
        ValueError: If the payload matches no known shape.
    """
    if isinstance(payload, dict) and isinstance(payload.get("entries"), list):
        entries = _parse_curated(payload["entries"], source_name)
    elif isinstance(payload, dict) and isinstance(payload.get("nodes"), list):
        entries = _parse_roadmap(payload["nodes"], payload.get("edges") or [], source_name)
    elif isinstance(payload, list):
        entries = _parse_roadmap(payload, [], source_name)
    elif isinstance(payload, dict) and payload.get("content") is not None:
        entries = _parse_roadmap(
            extract_nodes_from_content(payload["content"]), [], source_name
        )
    else:
        msg = f"Unrecognized taxonomy payload shape for source '{source_name}'"
        raise ValueError(msg)

    logger.debug("Parsed %d taxonomy entries from %s", len(entries), source_name)
    return entries
