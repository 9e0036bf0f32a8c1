"""Tests for entity models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skill_tree.entities import (
    DetectedSkill,
    Difficulty,
    LayoutNode,
    NodeType,
    Point,
    RepoSignal,
    Size,
    SkillLayout,
    TaxonomyCategory,
    TaxonomyEntry,
    slugify,
)


class TestSlugify:
    def test_spaces_become_hyphens(self) -> None:
        assert slugify("Spring Boot") == "spring-boot"

    def test_keeps_language_punctuation(self) -> None:
        assert slugify("C++") == "c++"
        assert slugify("C#") == "c#"
        assert slugify("Node.js") == "node.js"

    def test_strips_edges(self) -> None:
        assert slugify("  (Beta) Feature! ") == "beta-feature"


class TestTaxonomyEntry:
    def test_key_normalized(self) -> None:
        entry = TaxonomyEntry(key="Spring Boot", display_name="Spring Boot", parent_key="Java")
        assert entry.key == "spring-boot"
        assert entry.parent_key == "java"

    def test_keywords_lowercased(self) -> None:
        entry = TaxonomyEntry(key="react", display_name="React", keywords=["React", " NextJS ", ""])
        assert entry.keywords == frozenset({"react", "nextjs"})

    def test_string_keyword_not_split(self) -> None:
        entry = TaxonomyEntry(key="rtk", display_name="RTK", keywords="Redux Toolkit")
        assert entry.keywords == frozenset({"redux toolkit"})

    def test_defaults(self) -> None:
        entry = TaxonomyEntry(key="zen", display_name="Zen")
        assert entry.category == TaxonomyCategory.CONCEPT
        assert entry.difficulty == Difficulty.BEGINNER
        assert entry.weight == 1.0
        assert entry.parent_key is None

    def test_frozen(self) -> None:
        entry = TaxonomyEntry(key="zen", display_name="Zen")
        with pytest.raises(ValidationError):
            entry.weight = 2.0  # type: ignore[misc]

    def test_is_language(self) -> None:
        assert TaxonomyEntry(key="go", display_name="Go", category="language").is_language
        assert not TaxonomyEntry(key="react", display_name="React", category="framework").is_language


class TestTaxonomyCategory:
    def test_language_first_meta_last(self) -> None:
        order = list(TaxonomyCategory)
        assert order[0] == TaxonomyCategory.LANGUAGE
        assert order[-1] == TaxonomyCategory.META

    def test_string_values(self) -> None:
        assert TaxonomyCategory.DATA_SCIENCE == "data-science"


class TestDetectedSkill:
    def test_level_bounds(self) -> None:
        with pytest.raises(ValidationError):
            DetectedSkill(name="X", key="x", category="tools", level=0)
        with pytest.raises(ValidationError):
            DetectedSkill(name="X", key="x", category="tools", level=6)

    def test_hashable(self) -> None:
        a = DetectedSkill(name="React", key="react", category="framework", level=3)
        b = DetectedSkill(name="React", key="react", category="framework", level=3)
        assert hash(a) == hash(b)
        assert len({a, b}) == 1


class TestRepoSignal:
    def test_text_and_topics_lowercased(self) -> None:
        signal = RepoSignal(
            search_text="React App",
            repo_texts=["React App", None],
            repo_topics=[{"Docker", " "}],
        )
        assert signal.search_text == "react app"
        assert signal.repo_texts == ["react app", ""]
        assert signal.repo_topics == [frozenset({"docker"})]

    def test_empty(self) -> None:
        assert RepoSignal().is_empty
        assert RepoSignal(search_text="   ").is_empty

    def test_text_only_not_empty(self) -> None:
        assert not RepoSignal(search_text="react").is_empty

    def test_total_bytes(self) -> None:
        signal = RepoSignal(language_bytes={"Go": 10, "Rust": 30})
        assert signal.total_bytes == 40


class TestSkillLayout:
    def test_get_node_and_bottom(self) -> None:
        node = LayoutNode(
            id="center",
            label="Dev",
            node_type=NodeType.CENTER,
            position=Point(x=330, y=355),
            bounding_box=Size(w=140, h=50),
            center_point=Point(x=400, y=380),
        )
        layout = SkillLayout(nodes=[node], canvas_width=800, canvas_height=445)
        assert layout.get_node("center") is node
        assert layout.get_node("missing") is None
        assert node.bottom == 405
