"""Ingestion nodes: taxonomy sources, payload parsing, signal aggregation."""

from __future__ import annotations

from skill_tree.nodes.ingestion.signal_aggregator import aggregate_signal, repo_text
from skill_tree.nodes.ingestion.taxonomy_parser import (
    categorize,
    estimate_difficulty,
    extract_description,
    extract_label,
    generate_keywords,
    parse_taxonomy_payload,
)
from skill_tree.nodes.ingestion.taxonomy_sources import (
    ROLE_BASED_ROADMAPS,
    JsonFileSource,
    PackagedSource,
    RoadmapSource,
    bundled_source_names,
)

__all__ = [
    "ROLE_BASED_ROADMAPS",
    "JsonFileSource",
    "PackagedSource",
    "RoadmapSource",
    "aggregate_signal",
    "bundled_source_names",
    "categorize",
    "estimate_difficulty",
    "extract_description",
    "extract_label",
    "generate_keywords",
    "parse_taxonomy_payload",
    "repo_text",
]
