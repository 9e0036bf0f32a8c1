"""Tests for repository signal aggregation."""

from __future__ import annotations

from skill_tree.entities.signals import RepoRecord
from skill_tree.nodes.ingestion.signal_aggregator import aggregate_signal, repo_text


class TestRepoText:
    def test_joins_and_lowercases(self) -> None:
        repo = RepoRecord(name="Shop-UI", description="Built With React", topics=["Redux"])
        assert repo_text(repo) == "shop-ui built with react redux"

    def test_missing_description(self) -> None:
        assert repo_text(RepoRecord(name="cli")) == "cli"


class TestAggregateSignal:
    def test_bytes_summed_and_ordered(self, react_repos: list[RepoRecord]) -> None:
        signal = aggregate_signal(react_repos)

        assert signal.language_bytes == {"JavaScript": 11000, "HTML": 1000}
        assert list(signal.language_bytes) == ["JavaScript", "HTML"]
        assert signal.total_bytes == 12000

    def test_texts_and_topics_per_repo(self, react_repos: list[RepoRecord]) -> None:
        signal = aggregate_signal(react_repos)

        assert len(signal.repo_texts) == 2
        assert signal.repo_topics[0] == frozenset({"react"})
        assert signal.repo_topics[1] == frozenset()
        assert "redux" in signal.search_text
        assert signal.search_text == signal.search_text.lower()

    def test_primary_language_fallback(self) -> None:
        signal = aggregate_signal([RepoRecord(name="tool", language="Go")])
        assert signal.language_bytes == {"Go": 1}

    def test_forks_skipped_by_default(self) -> None:
        repos = [
            RepoRecord(name="mine", languages={"Rust": 10}),
            RepoRecord(name="theirs", languages={"Go": 500}, fork=True),
        ]
        assert aggregate_signal(repos).language_bytes == {"Rust": 10}
        assert aggregate_signal(repos, include_forks=True).language_bytes == {"Go": 500, "Rust": 10}

    def test_non_positive_counts_ignored(self) -> None:
        signal = aggregate_signal([RepoRecord(name="x", languages={"C": 0, "Go": 5})])
        assert signal.language_bytes == {"Go": 5}

    def test_empty(self) -> None:
        signal = aggregate_signal([])
        assert signal.is_empty
        assert signal.repo_texts == []
