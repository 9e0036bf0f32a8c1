"""Shared test fixtures for skill-tree."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from skill_tree.entities.signals import RepoRecord
from skill_tree.entities.taxonomy import TaxonomyEntry
from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog


def _make_entry(
    key: str,
    name: str,
    category: str,
    keywords: list[str] | None = None,
    parent: str | None = None,
    weight: float = 1.0,
    source: str = "test",
) -> TaxonomyEntry:
    """Build a TaxonomyEntry with test defaults."""
    return TaxonomyEntry(
        key=key,
        display_name=name,
        category=category,
        keywords=keywords if keywords is not None else [key],
        parent_key=parent,
        weight=weight,
        source=source,
    )


@pytest.fixture
def entry_factory() -> Callable[..., TaxonomyEntry]:
    """Factory building TaxonomyEntry objects with test defaults."""
    return _make_entry


@pytest.fixture
def web_catalog() -> TaxonomyCatalog:
    """Small catalog with a JavaScript -> React -> Redux chain."""
    return TaxonomyCatalog([
        _make_entry("javascript", "JavaScript", "language", ["javascript", "js"]),
        _make_entry("typescript", "TypeScript", "language", ["typescript"], parent="javascript"),
        _make_entry("python", "Python", "language", ["python", "jupyter notebook"]),
        _make_entry("html", "HTML", "language", ["html"], weight=0.5),
        _make_entry("react", "React", "framework", ["react", "nextjs"], parent="javascript"),
        _make_entry("redux", "Redux", "framework", ["redux"], parent="react"),
        _make_entry("django", "Django", "backend", ["django"], parent="python"),
        _make_entry("docker", "Docker", "devops", ["docker", "dockerfile"]),
        _make_entry("full-stack", "Full Stack Developer", "meta", ["full stack", "fullstack"]),
    ])


@pytest.fixture
def react_repos() -> list[RepoRecord]:
    """Two JavaScript repositories, one using React and Redux."""
    return [
        RepoRecord(
            name="shop-ui",
            description="Storefront built with Redux",
            topics=["react"],
            language="JavaScript",
            languages={"JavaScript": 9000, "HTML": 1000},
        ),
        RepoRecord(
            name="dotfiles",
            description="My shell setup",
            language="JavaScript",
            languages={"JavaScript": 2000},
        ),
    ]


@pytest.fixture
def curated_payload() -> dict[str, Any]:
    """Curated catalog payload in the bundled JSON shape."""
    return {
        "name": "sample",
        "entries": [
            {"key": "javascript", "name": "JavaScript", "category": "language",
             "keywords": ["javascript", "js"]},
            {"key": "react", "name": "React", "category": "Framework",
             "keywords": ["react"], "parent": "javascript", "weight": 0.9},
            {"name": "Redux Toolkit", "category": "framework", "keywords": "rtk",
             "parent": "react"},
        ],
    }
